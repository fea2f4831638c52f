from ..graph.registry import TaskRegistry


def visualize(registry: TaskRegistry) -> str:
    """
    Returns the registry's dependency graph in the Graphviz DOT language.

    Edges point in execution direction: from the dependency to the task
    that waits for it.
    """
    dot_parts = [
        "digraph TaskOrder {",
        '  rankdir="TB";',
        '  node [shape=box, style="rounded,filled", fillcolor=white];',
    ]

    # 1. Define Nodes
    for task in registry.tasks:
        label = f"{_escape(task.name)}\\n(cost: {task.execution_cost})"
        dot_parts.append(f'  "{_escape(task.id)}" [label="{label}"];')

    # 2. Define Edges
    for edge in registry.edges:
        dot_parts.append(
            f'  "{_escape(edge.depends_on_id)}" -> "{_escape(edge.task_id)}";'
        )

    dot_parts.append("}")
    return "\n".join(dot_parts)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
