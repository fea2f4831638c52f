from .model import Dependency
from .registry import TaskRegistry, DependencyGraph
from .serialize import (
    registry_from_dict,
    load_plan,
    task_to_dict,
    schedule_to_dict,
)

__all__ = [
    "Dependency",
    "TaskRegistry",
    "DependencyGraph",
    "registry_from_dict",
    "load_plan",
    "task_to_dict",
    "schedule_to_dict",
]
