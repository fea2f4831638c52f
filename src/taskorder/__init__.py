from pathlib import Path
from typing import List, Union

from .spec.task import Task, same_task
from .graph.model import Dependency
from .graph.registry import TaskRegistry, DependencyGraph
from .graph.serialize import load_plan, registry_from_dict, schedule_to_dict
from .exceptions import (
    TaskOrderError,
    InvalidTaskError,
    DuplicateTaskError,
    UnknownTaskError,
    SelfDependencyError,
    CyclicDependencyError,
    PlanFormatError,
)
from .runtime.bus import MessageBus
from .runtime.subscribers import HumanReadableLogSubscriber
from .tools.visualize import visualize
from .app import TaskOrderApp

__all__ = [
    "Task",
    "same_task",
    "Dependency",
    "TaskRegistry",
    "DependencyGraph",
    "load_plan",
    "registry_from_dict",
    "schedule_to_dict",
    "schedule",
    "visualize",
    "MessageBus",
    "HumanReadableLogSubscriber",
    "TaskOrderApp",
    "TaskOrderError",
    "InvalidTaskError",
    "DuplicateTaskError",
    "UnknownTaskError",
    "SelfDependencyError",
    "CyclicDependencyError",
    "PlanFormatError",
]


def schedule(
    plan: Union[str, Path], log_level: str = "INFO", log_format: str = "human"
) -> List[Task]:
    """
    Loads a plan file and returns its tasks in execution order.

    This is the primary entry point for scripts. It sets up a default
    app with a human-readable logger.
    """
    app = TaskOrderApp(log_level=log_level, log_format=log_format)
    return app.load(plan).schedule_tasks()
