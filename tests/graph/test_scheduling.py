import random

import pytest

from taskorder.exceptions import CyclicDependencyError
from taskorder.graph.registry import TaskRegistry


def ids(schedule):
    return [task.id for task in schedule]


def assert_valid_order(registry, schedule):
    """Every edge's dependency precedes its task, and each task appears once."""
    order = ids(schedule)
    assert sorted(order) == sorted(task.id for task in registry.tasks)
    assert len(order) == len(set(order))
    index = {task_id: i for i, task_id in enumerate(order)}
    for edge in registry.edges:
        assert index[edge.depends_on_id] < index[edge.task_id], edge


def test_empty_registry_schedules_to_empty_list(registry):
    assert registry.schedule_tasks() == []


def test_single_task(registry):
    registry.add_task("T1", "Task 1", 5)
    assert ids(registry.schedule_tasks()) == ["T1"]


def test_linear_chain(registry):
    registry.add_task("T1", "Task 1", 5)
    registry.add_task("T2", "Task 2", 3)
    registry.add_task("T3", "Task 3", 2)
    registry.add_dependency("T2", "T1")
    registry.add_dependency("T3", "T2")
    assert ids(registry.schedule_tasks()) == ["T1", "T2", "T3"]


def test_chain_declared_in_reverse(registry):
    registry.add_task("deploy", "Deploy", 4)
    registry.add_task("package", "Package", 2)
    registry.add_task("compile", "Compile", 5)
    registry.add_dependency("deploy", "package")
    registry.add_dependency("package", "compile")
    assert ids(registry.schedule_tasks()) == ["compile", "package", "deploy"]


def test_diamond(diamond_registry):
    schedule = diamond_registry.schedule_tasks()
    order = ids(schedule)

    assert order.index("A") < order.index("B")
    assert order.index("A") < order.index("C")
    assert order.index("B") < order.index("D")
    assert order.index("C") < order.index("D")
    assert diamond_registry.get_total_execution_time() == 14
    # Insertion order breaks the tie between B and C
    assert order == ["A", "B", "C", "D"]


def test_disconnected_groups(registry):
    for i in range(1, 5):
        registry.add_task(f"T{i}", f"Task {i}", i)
    registry.add_dependency("T2", "T1")
    registry.add_dependency("T4", "T3")

    schedule = registry.schedule_tasks()
    assert len(schedule) == 4
    assert_valid_order(registry, schedule)


def test_independent_tasks_keep_insertion_order(registry):
    for task_id in ("zeta", "alpha", "mike"):
        registry.add_task(task_id, task_id.title(), 1)
    assert ids(registry.schedule_tasks()) == ["zeta", "alpha", "mike"]


def test_dependencies_are_visited_in_edge_order(registry):
    registry.add_task("D", "Dependent", 1)
    registry.add_task("X", "Second", 1)
    registry.add_task("Y", "First", 1)
    registry.add_dependency("D", "Y")
    registry.add_dependency("D", "X")
    assert ids(registry.schedule_tasks()) == ["Y", "X", "D"]


def test_fifty_task_chain_is_in_increasing_order(registry):
    for i in range(1, 51):
        registry.add_task(str(i), f"Task {i}", i % 10)
        if i > 1:
            registry.add_dependency(str(i), str(i - 1))

    assert ids(registry.schedule_tasks()) == [str(i) for i in range(1, 51)]


def test_fifty_task_chain_added_backwards(registry):
    for i in range(50, 0, -1):
        registry.add_task(str(i), f"Task {i}", 1)
    for i in range(2, 51):
        registry.add_dependency(str(i), str(i - 1))

    assert ids(registry.schedule_tasks()) == [str(i) for i in range(1, 51)]


def test_long_chain_does_not_hit_recursion_limit(registry):
    size = 5000
    for i in range(size):
        registry.add_task(f"n{i}", f"Node {i}", 0)
    # Register the deepest dependent first so the walk goes the full depth
    for i in range(size - 1, 0, -1):
        registry.add_dependency(f"n{i - 1}", f"n{i}")

    schedule = registry.schedule_tasks()
    assert ids(schedule) == [f"n{i}" for i in range(size - 1, -1, -1)]


def test_long_cycle_is_detected_without_recursion(registry):
    size = 3000
    for i in range(size):
        registry.add_task(f"n{i}", f"Node {i}", 1)
    for i in range(size):
        registry.add_dependency(f"n{i}", f"n{(i + 1) % size}")

    with pytest.raises(CyclicDependencyError) as exc:
        registry.schedule_tasks()
    assert exc.value.task_id == "n0"
    assert len(exc.value.cycle) == size + 1


def test_repeated_scheduling_is_stable(diamond_registry):
    first = ids(diamond_registry.schedule_tasks())
    second = ids(diamond_registry.schedule_tasks())
    assert first == second


def test_scheduling_does_not_mutate_registry(diamond_registry):
    edges_before = diamond_registry.edges
    tasks_before = diamond_registry.tasks
    diamond_registry.schedule_tasks()
    assert diamond_registry.edges == edges_before
    assert diamond_registry.tasks == tasks_before


def test_schedule_returns_registered_instances(registry):
    registry.add_task("T1", "Task 1", 5)
    assert registry.schedule_tasks()[0] is registry.get("T1")


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_random_acyclic_graphs_produce_valid_orders(seed):
    rng = random.Random(seed)
    registry = TaskRegistry()
    task_ids = [f"t{i}" for i in range(40)]
    rng.shuffle(task_ids)
    for task_id in task_ids:
        registry.add_task(task_id, task_id.upper(), rng.randint(0, 9))

    # Edges only go from a later rank to an earlier one, so no cycles
    rank = sorted(task_ids, key=lambda t: int(t[1:]))
    for _ in range(120):
        a, b = rng.sample(range(len(rank)), 2)
        later, earlier = max(a, b), min(a, b)
        registry.add_dependency(rank[later], rank[earlier])

    schedule = registry.schedule_tasks()
    assert_valid_order(registry, schedule)
    assert ids(registry.schedule_tasks()) == ids(schedule)
