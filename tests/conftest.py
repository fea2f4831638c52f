import pytest
from taskorder.graph.registry import TaskRegistry
from taskorder.runtime.bus import MessageBus
from taskorder.runtime.events import Event


class SpySubscriber:
    """A test utility to collect events from a MessageBus."""

    def __init__(self, bus: MessageBus):
        self.events = []
        bus.subscribe(Event, self.collect)

    def collect(self, event: Event):
        self.events.append(event)

    def events_of_type(self, event_type):
        """Returns a list of all events of a specific type."""
        return [e for e in self.events if isinstance(e, event_type)]


class RecordingRenderer:
    """Collects (msg_id, level, data) tuples instead of printing them."""

    def __init__(self):
        self.records = []

    def render(self, msg_id, level, **kwargs):
        self.records.append((msg_id, level, kwargs))

    def ids(self):
        return [msg_id for msg_id, _, _ in self.records]


@pytest.fixture
def bus_and_spy():
    """Provides a MessageBus instance and an attached SpySubscriber."""
    bus = MessageBus()
    spy = SpySubscriber(bus)
    return bus, spy


@pytest.fixture
def registry():
    return TaskRegistry()


@pytest.fixture
def diamond_registry():
    """A(5) <- B(3), C(2) <- D(4); 'x <- y' meaning y depends on x."""
    registry = TaskRegistry()
    registry.add_task("A", "Fetch Sources", 5)
    registry.add_task("B", "Build Library", 3)
    registry.add_task("C", "Build Docs", 2)
    registry.add_task("D", "Publish", 4)
    registry.add_dependency("B", "A")
    registry.add_dependency("C", "A")
    registry.add_dependency("D", "B")
    registry.add_dependency("D", "C")
    return registry


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()
