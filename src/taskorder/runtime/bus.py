from collections import defaultdict
from typing import Callable, List, Type, Dict, Any
from .events import Event

Handler = Callable[[Any], None]


class MessageBus:
    """
    A simple in-memory bus dispatching registry events to subscribers.

    A handler subscribed to an event class also receives events of its
    subclasses, so subscribing to `Event` receives everything.
    """

    def __init__(self):
        self._subscribers: Dict[Type[Event], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[Event], handler: Handler) -> None:
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: Type[Event], handler: Handler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        """Dispatch an event, most specific subscriptions first."""
        for event_type in type(event).__mro__:
            for handler in list(self._subscribers.get(event_type, ())):
                handler(event)
            if event_type is Event:
                break
