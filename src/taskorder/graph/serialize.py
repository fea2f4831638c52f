import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from taskorder.exceptions import PlanFormatError
from taskorder.graph.registry import TaskRegistry
from taskorder.runtime.bus import MessageBus
from taskorder.spec.task import Task

# --- Helpers ---


def _as_id(value: Any, where: str, source: Optional[str]) -> str:
    # YAML happily turns `id: 1` into an int; ids are always text here
    if isinstance(value, bool):
        raise PlanFormatError(f"{where} must be a string, got a boolean", source)
    if isinstance(value, (str, int)):
        return str(value)
    raise PlanFormatError(
        f"{where} must be a string, got {type(value).__name__}", source
    )


def _as_list(value: Any, where: str, source: Optional[str]) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PlanFormatError(f"{where} must be a list", source)
    return value


# --- Plan to Registry ---


def registry_from_dict(
    data: Mapping[str, Any],
    bus: Optional[MessageBus] = None,
    source: Optional[str] = None,
) -> TaskRegistry:
    """
    Builds a registry from a plan mapping of the form

        {"tasks": [{"id": ..., "name": ..., "cost": ..., "depends_on": [...]}],
         "dependencies": [[task_id, depends_on_id], ...]}

    All tasks are registered before any edge, so `depends_on` may refer to
    tasks declared later in the list. Shape problems raise PlanFormatError;
    validation errors from the registry propagate unchanged.
    """
    if not isinstance(data, Mapping):
        raise PlanFormatError("plan must be a mapping", source)

    registry = TaskRegistry(bus=bus)
    pending_edges: List[tuple] = []

    # 1. Tasks
    for index, entry in enumerate(_as_list(data.get("tasks"), "'tasks'", source)):
        where = f"tasks[{index}]"
        if not isinstance(entry, Mapping):
            raise PlanFormatError(f"{where} must be a mapping", source)
        missing = [key for key in ("id", "name", "cost") if key not in entry]
        if missing:
            raise PlanFormatError(
                f"{where} is missing {', '.join(repr(k) for k in missing)}", source
            )

        task_id = _as_id(entry["id"], f"{where}.id", source)
        if entry["name"] is not None and not isinstance(entry["name"], str):
            raise PlanFormatError(
                f"{where}.name must be a string, got {type(entry['name']).__name__}",
                source,
            )
        registry.add_task(Task(task_id, entry["name"], entry["cost"]))

        for dep in _as_list(entry.get("depends_on"), f"{where}.depends_on", source):
            pending_edges.append(
                (task_id, _as_id(dep, f"{where}.depends_on", source))
            )

    # 2. Explicit edge list
    for index, pair in enumerate(
        _as_list(data.get("dependencies"), "'dependencies'", source)
    ):
        where = f"dependencies[{index}]"
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise PlanFormatError(
                f"{where} must be a [task, depends_on] pair", source
            )
        pending_edges.append(
            (_as_id(pair[0], where, source), _as_id(pair[1], where, source))
        )

    # 3. Edges, once every task exists
    for task_id, depends_on_id in pending_edges:
        registry.add_dependency(task_id, depends_on_id)

    return registry


def load_plan(
    path: Union[str, Path], bus: Optional[MessageBus] = None
) -> TaskRegistry:
    """Reads a `.json`, `.yml` or `.yaml` plan file into a new registry."""
    path = Path(path)
    source = str(path)
    suffix = path.suffix.lower()

    with open(path, "r", encoding="utf-8") as f:
        try:
            if suffix == ".json":
                data = json.load(f)
            elif suffix in (".yml", ".yaml"):
                data = yaml.safe_load(f)
            else:
                raise PlanFormatError(
                    f"unsupported plan file type '{suffix or path.name}'", source
                )
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise PlanFormatError(f"could not parse plan: {e}", source) from e

    if data is None:
        data = {}
    return registry_from_dict(data, bus=bus, source=source)


# --- Schedule to Dict ---


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "cost": task.execution_cost,
    }


def schedule_to_dict(registry: TaskRegistry) -> Dict[str, Any]:
    """Schedules the registry and returns the order with its total cost."""
    schedule = registry.schedule_tasks()
    return {
        "order": [task_to_dict(task) for task in schedule],
        "total_execution_time": registry.get_total_execution_time(),
    }
