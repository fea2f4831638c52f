from typing import Optional

from .bus import MessageBus
from ..messaging.bus import MessageBus as MessagingBus, bus as messaging_bus
from .events import (
    TaskAdded,
    DependencyAdded,
    ScheduleComputed,
    CycleDetected,
    RegistryCleared,
)


class HumanReadableLogSubscriber:
    """
    Listens to registry events and translates them into semantic messages
    on the messaging bus. It acts as a bridge between the event domain
    and the user-facing message domain.
    """

    def __init__(
        self, event_bus: MessageBus, messages: Optional[MessagingBus] = None
    ):
        self._messages = messages if messages is not None else messaging_bus

        event_bus.subscribe(TaskAdded, self.on_task_added)
        event_bus.subscribe(DependencyAdded, self.on_dependency_added)
        event_bus.subscribe(ScheduleComputed, self.on_schedule_computed)
        event_bus.subscribe(CycleDetected, self.on_cycle_detected)
        event_bus.subscribe(RegistryCleared, self.on_registry_cleared)

    def on_task_added(self, event: TaskAdded):
        self._messages.debug(
            "task.added",
            task_id=event.task_id,
            task_name=event.task_name,
            execution_cost=event.execution_cost,
        )

    def on_dependency_added(self, event: DependencyAdded):
        self._messages.debug(
            "dependency.added",
            task_id=event.task_id,
            depends_on_id=event.depends_on_id,
        )

    def on_schedule_computed(self, event: ScheduleComputed):
        self._messages.info(
            "schedule.computed",
            task_count=len(event.order),
            total_execution_time=event.total_execution_time,
        )

    def on_cycle_detected(self, event: CycleDetected):
        self._messages.error(
            "schedule.cycle", task_id=event.task_id, cycle=list(event.cycle)
        )

    def on_registry_cleared(self, event: RegistryCleared):
        self._messages.info(
            "registry.cleared",
            task_count=event.task_count,
            edge_count=event.edge_count,
        )
