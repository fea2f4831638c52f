from dataclasses import dataclass

from taskorder.exceptions import InvalidTaskError


@dataclass(frozen=True, eq=False)
class Task:
    """
    An immutable unit of work with a unitless execution cost.

    A task's identity is its `id`. Instances deliberately keep object
    equality; compare tasks by id through `key` or `same_task()`.
    """

    id: str
    name: str
    execution_cost: int

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidTaskError("id", "Task ID cannot be null or empty")
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidTaskError("name", "Task name cannot be null or empty")
        # bool is an int subclass but never a meaningful cost
        if isinstance(self.execution_cost, bool) or not isinstance(
            self.execution_cost, int
        ):
            raise InvalidTaskError(
                "execution_cost", "Execution time must be an integer"
            )
        if self.execution_cost < 0:
            raise InvalidTaskError(
                "execution_cost", "Execution time cannot be negative"
            )

    @property
    def key(self) -> str:
        return self.id

    def __str__(self) -> str:
        return (
            f"Task{{id='{self.id}', name='{self.name}', "
            f"executionTime={self.execution_cost}}}"
        )


def same_task(a: Task, b: Task) -> bool:
    """True when both tasks carry the same id, whatever their other fields."""
    return a.key == b.key
