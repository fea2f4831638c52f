from dataclasses import dataclass, field
from typing import Tuple
from uuid import uuid4
import time


@dataclass(frozen=True)
class Event:
    """Base class for all registry events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class TaskAdded(Event):
    """Fired after a task has been stored in a registry."""

    task_id: str = ""
    task_name: str = ""
    execution_cost: int = 0


@dataclass(frozen=True)
class DependencyAdded(Event):
    """Fired after a dependency edge has been recorded."""

    task_id: str = ""
    depends_on_id: str = ""


@dataclass(frozen=True)
class ScheduleComputed(Event):
    """Fired when scheduling produced a valid order."""

    order: Tuple[str, ...] = ()
    total_execution_time: int = 0


@dataclass(frozen=True)
class CycleDetected(Event):
    """Fired when scheduling failed because of a dependency cycle."""

    task_id: str = ""
    cycle: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RegistryCleared(Event):
    """Fired after a registry dropped all of its tasks and edges."""

    task_count: int = 0
    edge_count: int = 0
