from dataclasses import dataclass


@dataclass(frozen=True)
class Dependency:
    """A directed edge: `task_id` runs after `depends_on_id` completes."""

    task_id: str
    depends_on_id: str
