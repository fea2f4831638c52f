"""A small build pipeline used by `taskorder demo`."""

from typing import Optional

from taskorder.graph.registry import TaskRegistry
from taskorder.runtime.bus import MessageBus


def build_sample_registry(bus: Optional[MessageBus] = None) -> TaskRegistry:
    registry = TaskRegistry(bus=bus)

    registry.add_task("1", "Compile Code", 5)
    registry.add_task("2", "Run Tests", 3)
    registry.add_task("3", "Package Artifact", 2)
    registry.add_task("4", "Deploy", 4)

    registry.add_dependency("2", "1")  # Tests depend on compilation
    registry.add_dependency("3", "2")  # Packaging depends on tests
    registry.add_dependency("4", "3")  # Deployment depends on packaging

    return registry
