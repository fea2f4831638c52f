import json
from pathlib import Path
from typing import List, NoReturn

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from taskorder.app import LOG_FORMATS, TaskOrderApp
from taskorder.exceptions import TaskOrderError
from taskorder.graph.registry import TaskRegistry
from taskorder.graph.serialize import schedule_to_dict
from taskorder.messaging.bus import bus
from taskorder.messaging.renderer import JsonRenderer
from taskorder.spec.task import Task
from taskorder.tools.rendering import RichCliRenderer
from taskorder.tools.visualize import visualize as to_dot

OUTPUT_FORMATS = ("table", "json")

app = typer.Typer(help="Order tasks so that every dependency runs first.")


class _State:
    log_level: str = "INFO"
    log_format: str = "human"


state = _State()


@app.callback()
def configure(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        envvar="TASKORDER_LOG_LEVEL",
        help="Minimum level for console logging (DEBUG, INFO, WARNING, ERROR).",
    ),
    log_format: str = typer.Option(
        "human",
        "--log-format",
        envvar="TASKORDER_LOG_FORMAT",
        help="Format for logging ('human' or 'json').",
    ),
):
    if log_format not in LOG_FORMATS:
        bus.set_renderer(RichCliRenderer(store=bus.store))
        bus.error("cli.invalid_log_format", log_format=log_format)
        raise typer.Exit(1)
    state.log_level = log_level
    state.log_format = log_format


def _create_app() -> TaskOrderApp:
    if state.log_format == "json":
        renderer = JsonRenderer(min_level=state.log_level, store=bus.store)
    else:
        renderer = RichCliRenderer(store=bus.store, min_level=state.log_level)
    return TaskOrderApp(
        log_level=state.log_level, log_format=state.log_format, renderer=renderer
    )


def _fail(error: Exception) -> NoReturn:
    bus.error("cli.error", error=str(error))
    raise typer.Exit(1)


def _render_schedule(registry: TaskRegistry, output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps(schedule_to_dict(registry), indent=2))
        return

    schedule: List[Task] = registry.schedule_tasks()
    table = Table(title=bus.store.get("cli.schedule_header"), title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Cost", justify="right", style="green")

    for position, task in enumerate(schedule, start=1):
        table.add_row(
            str(position), Text(task.id), Text(task.name), str(task.execution_cost)
        )

    console = Console()
    console.print(table)
    console.print(
        bus.store.get("cli.total", total=registry.get_total_execution_time()),
        markup=False,
        highlight=False,
    )


def _check_output_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        bus.error("cli.invalid_output_format", output_format=output_format)
        raise typer.Exit(1)


@app.command()
def schedule(
    plan: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Plan file (.json, .yml or .yaml)."
    ),
    output_format: str = typer.Option(
        "table", "--format", help="Output format ('table' or 'json')."
    ),
):
    """Prints the tasks of a plan in execution order."""
    taskorder_app = _create_app()
    _check_output_format(output_format)
    try:
        registry = taskorder_app.load(plan)
        _render_schedule(registry, output_format)
    except TaskOrderError as e:
        _fail(e)


@app.command()
def visualize(
    plan: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Plan file (.json, .yml or .yaml)."
    ),
):
    """Prints the plan's dependency graph in Graphviz DOT format."""
    taskorder_app = _create_app()
    try:
        registry = taskorder_app.load(plan)
    except TaskOrderError as e:
        _fail(e)
    typer.echo(to_dot(registry))


@app.command()
def demo(
    output_format: str = typer.Option(
        "table", "--format", help="Output format ('table' or 'json')."
    ),
):
    """Schedules a small sample build pipeline."""
    taskorder_app = _create_app()
    _check_output_format(output_format)
    try:
        _render_schedule(taskorder_app.sample(), output_format)
    except TaskOrderError as e:
        _fail(e)


def main():
    app()


if __name__ == "__main__":
    main()
