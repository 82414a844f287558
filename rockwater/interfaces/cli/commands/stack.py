"""Stack inspection CLI commands.

Commands that read a stack file and show the computed schedule or the
rolled-up duration of one task. Nothing is written back.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from rockwater.application import get_schedule_stats
from rockwater.domain.shared import ConfigurationError
from rockwater.domain.task import (
    TaskNode,
    build_registry,
    find_by_id,
    get_min_duration,
    get_total_greedy_duration,
)
from rockwater.domain.types import format_clock
from rockwater.interfaces.cli.common import (
    NowOption,
    StackPath,
    format_task_line,
    load_stack,
    print_error,
    print_header,
    print_separator,
    resolve_now,
    schedule_or_exit,
)

app = typer.Typer(help="Inspect a task stack")

TaskIdArgument = Annotated[str, typer.Argument(help="Id of the task to inspect")]


@app.command("schedule")
def schedule(
    stack_file: StackPath,
    now: NowOption = None,
    as_json: bool = typer.Option(False, "--json", help="Print the schedule as JSON"),
) -> None:
    """Show the computed rock-and-water schedule.

    Floating tasks fill the time from --now onward; anchored tasks keep
    their slots unless an earlier anchored task pushes them later.
    """
    reference = resolve_now(now)
    scheduled = schedule_or_exit(load_stack(stack_file), reference)

    if as_json:
        payload = [task.model_dump(mode="json", exclude={"children"}) for task in scheduled]
        typer.echo(json.dumps(payload, indent=2))
        return

    print_header(f"SCHEDULE from {format_clock(reference)}")
    if not scheduled:
        typer.echo("Stack is empty.")
    for task in scheduled:
        typer.echo(format_task_line(task, reference))
    print_separator()

    stats = get_schedule_stats(scheduled)
    summary = f"{stats.todo} to do, {stats.done} done, {stats.busy_minutes}m planned"
    if stats.ends_at is not None:
        summary += f", ends {format_clock(stats.ends_at)}"
    typer.echo(summary)


def _find_or_exit(stack_file: Path, task_id: str) -> tuple[list[TaskNode], TaskNode]:
    tasks = load_stack(stack_file)
    node = find_by_id(tasks, task_id)
    if node is None:
        print_error(f"Task not found: {task_id}")
        raise typer.Exit(1)
    return tasks, node


@app.command("rollup")
def rollup(stack_file: StackPath, task_id: TaskIdArgument) -> None:
    """Show a task's duration including outstanding subtasks."""
    tasks, node = _find_or_exit(stack_file, task_id)
    try:
        audit = get_total_greedy_duration(node, build_registry(tasks))
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    typer.echo(f"{node.title or node.id}: {audit.total}m")
    for line in audit.trace:
        typer.echo(f"  {line}")


@app.command("min-duration")
def min_duration(stack_file: StackPath, task_id: TaskIdArgument) -> None:
    """Show the outstanding subtask time a task cannot shrink below."""
    tasks, node = _find_or_exit(stack_file, task_id)
    try:
        minimum = get_min_duration(node, build_registry(tasks))
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    typer.echo(f"{node.title or node.id}: {minimum}m of outstanding subtasks")
