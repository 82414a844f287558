"""Stack editing CLI commands.

Each command loads a stack file, schedules it, applies one edit through
the stack service and writes the recomputed stack back.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from rockwater.application import (
    archive_task,
    scale_duration,
    toggle_anchor,
    toggle_status,
)
from rockwater.application.stack_service import EditResult
from rockwater.config import get_settings
from rockwater.domain.shared import Err
from rockwater.domain.task import TaskNode, index_of
from rockwater.interfaces.cli.common import (
    NowOption,
    StackPath,
    format_task_line,
    load_stack,
    print_error,
    print_success,
    resolve_now,
    save_stack,
    schedule_or_exit,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Edit a task stack")

TaskIdArgument = Annotated[str, typer.Argument(help="Id of a top-level task in the stack")]


class Direction(str, Enum):
    """Scaling direction."""

    UP = "up"
    DOWN = "down"


def _apply(
    stack_file: Path,
    task_id: str,
    now: datetime,
    edit: Callable[[list[TaskNode], int], EditResult],
) -> TaskNode | None:
    """Run one edit against a stack file and save the result.

    Returns:
        The edited task after rescheduling, or None if it left the stack.

    Raises:
        typer.Exit: If the task is missing or the edit is refused.
    """
    scheduled = schedule_or_exit(load_stack(stack_file), now)
    index = index_of(scheduled, task_id)
    if index == -1:
        print_error(f"Task not in stack: {task_id}")
        raise typer.Exit(1)

    result = edit(scheduled, index)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    new_stack, event = result.value
    logger.info(f"{type(event).__name__} {event.model_dump_json(exclude={'event_id'})}")
    save_stack(stack_file, new_stack)

    new_index = index_of(new_stack, task_id)
    return new_stack[new_index] if new_index != -1 else None


@app.command("done")
def done(stack_file: StackPath, task_id: TaskIdArgument, now: NowOption = None) -> None:
    """Toggle a task between todo and done."""
    reference = resolve_now(now)
    task = _apply(stack_file, task_id, reference, lambda tasks, i: toggle_status(tasks, i, reference))
    print_success(format_task_line(task, reference))


@app.command("anchor")
def anchor(
    stack_file: StackPath,
    task_id: TaskIdArgument,
    at: Optional[str] = typer.Option(None, "--at", help="Start time to anchor at (ISO-8601)"),
    now: NowOption = None,
) -> None:
    """Anchor a task to a fixed time, or release an anchored task."""
    reference = resolve_now(now)
    start_time = resolve_now(at) if at else None
    task = _apply(
        stack_file,
        task_id,
        reference,
        lambda tasks, i: toggle_anchor(tasks, i, reference, start_time),
    )
    print_success(format_task_line(task, reference))


@app.command("scale")
def scale(
    stack_file: StackPath,
    task_id: TaskIdArgument,
    direction: Direction = typer.Argument(..., help="up or down"),
    now: NowOption = None,
) -> None:
    """Step a task's own duration up or down."""
    reference = resolve_now(now)
    settings = get_settings()
    task = _apply(
        stack_file,
        task_id,
        reference,
        lambda tasks, i: scale_duration(tasks, i, reference, direction.value, settings),
    )
    print_success(format_task_line(task, reference))


@app.command("archive")
def archive(stack_file: StackPath, task_id: TaskIdArgument, now: NowOption = None) -> None:
    """Remove a task from the stack."""
    reference = resolve_now(now)
    _apply(stack_file, task_id, reference, lambda tasks, i: archive_task(tasks, i, reference))
    print_success(f"Archived {task_id}")
