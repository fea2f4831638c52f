from pathlib import Path
from typing import Optional, Union

from taskorder.examples import build_sample_registry
from taskorder.graph.registry import TaskRegistry
from taskorder.graph.serialize import load_plan
from taskorder.messaging.bus import MessageBus as MessagingBus, Renderer, bus
from taskorder.messaging.renderer import CliRenderer, JsonRenderer
from taskorder.runtime.bus import MessageBus
from taskorder.runtime.subscribers import HumanReadableLogSubscriber

LOG_FORMATS = ("human", "json")


class TaskOrderApp:
    """
    Wires registries to the event bus and the messaging layer.

    Every registry created through the app publishes its events on the
    app's event bus, where they are turned into log messages.
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_format: str = "human",
        renderer: Optional[Renderer] = None,
        messages: Optional[MessagingBus] = None,
    ):
        if log_format not in LOG_FORMATS:
            raise ValueError(f"Unsupported log format: {log_format}")

        self.messages = messages if messages is not None else bus

        # 1. Setup Messaging & Rendering
        if renderer is None:
            if log_format == "json":
                renderer = JsonRenderer(min_level=log_level, store=self.messages.store)
            else:
                renderer = CliRenderer(store=self.messages.store, min_level=log_level)
        self.renderer = renderer
        self.messages.set_renderer(self.renderer)

        # 2. Setup Event System
        self.event_bus = MessageBus()
        self.log_subscriber = HumanReadableLogSubscriber(
            self.event_bus, messages=self.messages
        )

    def new_registry(self) -> TaskRegistry:
        return TaskRegistry(bus=self.event_bus)

    def load(self, path: Union[str, Path]) -> TaskRegistry:
        registry = load_plan(path, bus=self.event_bus)
        self.messages.info("cli.plan_loaded", path=str(path))
        if registry.is_empty:
            self.messages.warning("cli.empty_plan", path=str(path))
        return registry

    def sample(self) -> TaskRegistry:
        registry = build_sample_registry(bus=self.event_bus)
        self.messages.info("cli.demo_loaded")
        return registry
