from typing import Dict, Iterator, List, Optional, Set, Tuple, Union, overload

from taskorder.exceptions import (
    CyclicDependencyError,
    DuplicateTaskError,
    SelfDependencyError,
    UnknownTaskError,
)
from taskorder.graph.model import Dependency
from taskorder.runtime.bus import MessageBus
from taskorder.runtime.events import (
    CycleDetected,
    DependencyAdded,
    Event,
    RegistryCleared,
    ScheduleComputed,
    TaskAdded,
)
from taskorder.spec.task import Task


class TaskRegistry:
    """
    Holds tasks and their "depends-on" edges and orders them.

    Tasks are kept in insertion order, so scheduling is deterministic:
    tasks with no dependency relationship between them come out in the
    order they were added. Every edge is validated when it is added, and
    cycles are only detected when a schedule is requested.

    The registry does no locking. Callers sharing one between threads must
    serialize access themselves.
    """

    def __init__(self, bus: Optional[MessageBus] = None):
        self._tasks: Dict[str, Task] = {}
        # task id -> ids it depends on, in the order the edges were added
        self._dependencies: Dict[str, List[str]] = {}
        self._bus = bus

    # --- Mutation ---

    @overload
    def add_task(self, task: Task) -> None: ...

    @overload
    def add_task(self, task: str, name: str, execution_cost: int) -> None: ...

    def add_task(
        self,
        task: Union[Task, str],
        name: Optional[str] = None,
        execution_cost: Optional[int] = None,
    ) -> None:
        """
        Registers a task. Accepts either a Task or its three fields.

        Raises InvalidTaskError for a bad field triple and DuplicateTaskError
        if the id is already registered. Nothing is stored on failure.
        """
        if isinstance(task, Task):
            if name is not None or execution_cost is not None:
                raise TypeError(
                    "add_task() takes either a Task or (id, name, execution_cost), not both"
                )
        else:
            task = Task(task, name, execution_cost)

        if task.id in self._tasks:
            raise DuplicateTaskError(task.id)

        self._tasks[task.id] = task
        self._dependencies.setdefault(task.id, [])

        self._publish(
            TaskAdded(
                task_id=task.id,
                task_name=task.name,
                execution_cost=task.execution_cost,
            )
        )

    def add_dependency(self, task_id: str, depends_on_id: str) -> None:
        """
        Declares that `task_id` runs after `depends_on_id`.

        Repeated edges are kept; they are harmless to scheduling.
        """
        if task_id not in self._tasks:
            raise UnknownTaskError(task_id)
        if depends_on_id not in self._tasks:
            raise UnknownTaskError(depends_on_id, role="dependency")
        if task_id == depends_on_id:
            raise SelfDependencyError(task_id)

        self._dependencies.setdefault(task_id, []).append(depends_on_id)

        self._publish(DependencyAdded(task_id=task_id, depends_on_id=depends_on_id))

    def clear(self) -> None:
        task_count, edge_count = len(self._tasks), self.edge_count
        self._tasks.clear()
        self._dependencies.clear()
        self._publish(RegistryCleared(task_count=task_count, edge_count=edge_count))

    # --- Scheduling ---

    def schedule_tasks(self) -> List[Task]:
        """
        Returns every registered task in an order where each task comes
        after all of the tasks it depends on.

        Uses a depth-first post-order walk over the tasks in insertion order,
        descending into dependencies in the order their edges were added.
        Raises CyclicDependencyError, naming the task where the walk re-entered
        the cycle, if no such order exists. The registry is not modified.
        """
        visited: Set[str] = set()
        # Ordered so the active path can be reported when a cycle is found
        in_progress: Dict[str, None] = {}
        sorted_ids: List[str] = []

        try:
            for task_id in self._tasks:
                if task_id not in visited:
                    self._visit(task_id, visited, in_progress, sorted_ids)
        except CyclicDependencyError as e:
            self._publish(CycleDetected(task_id=e.task_id, cycle=tuple(e.cycle)))
            raise

        schedule = [self._tasks[task_id] for task_id in sorted_ids]
        self._publish(
            ScheduleComputed(
                order=tuple(sorted_ids),
                total_execution_time=self.get_total_execution_time(),
            )
        )
        return schedule

    def _visit(
        self,
        root: str,
        visited: Set[str],
        in_progress: Dict[str, None],
        sorted_ids: List[str],
    ) -> None:
        # Explicit stack of (task id, iterator over its remaining dependencies)
        # so long chains are not bounded by the interpreter's recursion limit.
        in_progress[root] = None
        stack: List[Tuple[str, Iterator[str]]] = [
            (root, iter(self._dependencies.get(root, ())))
        ]

        while stack:
            task_id, remaining = stack[-1]
            for dep_id in remaining:
                if dep_id in in_progress:
                    raise CyclicDependencyError(
                        dep_id, cycle=_cycle_path(in_progress, dep_id)
                    )
                if dep_id not in visited:
                    in_progress[dep_id] = None
                    stack.append((dep_id, iter(self._dependencies.get(dep_id, ()))))
                    break
            else:
                # All dependencies resolved: emit the task itself
                stack.pop()
                del in_progress[task_id]
                visited.add(task_id)
                sorted_ids.append(task_id)

    def get_total_execution_time(self) -> int:
        """
        Sum of all registered execution costs; 0 when empty.

        Python integers are unbounded, so the sum cannot overflow.
        """
        return sum(task.execution_cost for task in self._tasks.values())

    # --- Read accessors ---

    def get(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise UnknownTaskError(task_id) from None

    def dependencies_of(self, task_id: str) -> Tuple[str, ...]:
        if task_id not in self._tasks:
            raise UnknownTaskError(task_id)
        return tuple(self._dependencies.get(task_id, ()))

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks.values())

    @property
    def edges(self) -> Tuple[Dependency, ...]:
        return tuple(
            Dependency(task_id=task_id, depends_on_id=dep_id)
            for task_id, deps in self._dependencies.items()
            for dep_id in deps
        )

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self._dependencies.values())

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def _publish(self, event: Event) -> None:
        if self._bus is not None:
            self._bus.publish(event)


# The engine is a plain dependency graph; both names are public.
DependencyGraph = TaskRegistry


def _cycle_path(in_progress: Dict[str, None], reentered: str) -> List[str]:
    path = list(in_progress)
    return path[path.index(reentered):] + [reentered]
