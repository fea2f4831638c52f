from typing import Iterable, Optional


class TaskOrderError(Exception):
    """Base class for all errors raised by taskorder."""

    pass


class InvalidTaskError(TaskOrderError, ValueError):
    """
    Raised when a Task is constructed with an empty id or name, or with a
    negative (or non-integer) execution cost. No Task object is produced.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class DuplicateTaskError(TaskOrderError, ValueError):
    """Raised when a task id is registered twice."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} already exists")


class UnknownTaskError(TaskOrderError, ValueError):
    """
    Raised when an operation references a task id that is not registered.
    `role` tells which side of a dependency edge was missing.
    """

    def __init__(self, task_id: str, role: str = "task"):
        self.task_id = task_id
        self.role = role
        label = "Dependency" if role == "dependency" else "Task"
        super().__init__(f"{label} {task_id} does not exist")


class SelfDependencyError(TaskOrderError, ValueError):
    """Raised when a task is declared to depend on itself."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("Task cannot depend on itself")


class CyclicDependencyError(TaskOrderError, RuntimeError):
    """
    Raised by scheduling when the dependency edges form a cycle.

    `task_id` is the task at which the traversal re-entered the cycle and
    `cycle` is the closed path of ids through it, starting and ending with
    `task_id`. The registry is left untouched.
    """

    def __init__(self, task_id: str, cycle: Optional[Iterable[str]] = None):
        self.task_id = task_id
        self.cycle = list(cycle) if cycle else [task_id]
        message = f"Cyclic dependency detected involving task {task_id}"
        if len(self.cycle) > 1:
            message += f" ({' -> '.join(self.cycle)})"
        super().__init__(message)


class PlanFormatError(TaskOrderError, ValueError):
    """Raised when a plan file or mapping does not have the expected shape."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
