"""Shared utilities for Rockwater CLI commands.

This module provides common utilities used across CLI commands:
- Stack file loading and saving with friendly errors
- Reference time handling (--now)
- Formatted output helpers (error, success, headers)
- Task formatting for display
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from rockwater.application import recompute
from rockwater.domain.shared import ConfigurationError, is_err
from rockwater.domain.task import TaskNode
from rockwater.domain.types import format_clock, parse_point_in_time, same_day
from rockwater.infrastructure.storage import StackRepository

# Reusable parameter types for CLI commands
# Usage: def my_command(stack_file: StackPath, now: NowOption = None) -> None:
StackPath = Annotated[Path, typer.Argument(
    help="Path to a stack file (or set ROCKWATER_STACK env var)",
    envvar="ROCKWATER_STACK",
)]

NowOption = Annotated[Optional[str], typer.Option(
    "--now",
    help="Reference time as ISO-8601 (default: current local time)",
)]


def configure_logging(verbose: bool) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_now(text: str | None) -> datetime:
    """Parse --now, defaulting to the current local time.

    Raises:
        typer.Exit: If the value is not a valid timestamp.
    """
    if text is None:
        return datetime.now().replace(second=0, microsecond=0)
    try:
        return parse_point_in_time(text)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


def load_stack(path: Path) -> list[TaskNode]:
    """Load a stack file or exit with an error message."""
    result = StackRepository().load(path)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def save_stack(path: Path, tasks: list[TaskNode]) -> None:
    """Save a stack file or exit with an error message."""
    result = StackRepository().save(path, tasks)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)


def schedule_or_exit(tasks: list[TaskNode], now: datetime) -> list[TaskNode]:
    """Compute the schedule or exit with the precondition failure."""
    result = recompute(tasks, now)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def format_task_line(task: TaskNode, now: datetime | None = None) -> str:
    """Format one scheduled task for display.

    Example:
        "09:00  [ ] Standup (15m) [rock]"
    """
    when = "--:--"
    if task.start_time is not None:
        when = format_clock(task.start_time)
        if now is not None and not same_day(task.start_time, now):
            when = f"{task.start_time:%m-%d} {when}"

    check = "[x]" if task.is_done() else "[ ]"
    rock = " [rock]" if task.is_anchored else ""
    own = task.own_duration
    minutes = f"{task.duration}m" if task.duration == own else f"{task.duration}m, own {own}m"
    return f"{when}  {check} {task.title or task.id} ({minutes}){rock}"


__all__ = [
    "StackPath",
    "NowOption",
    "configure_logging",
    "resolve_now",
    "load_stack",
    "save_stack",
    "schedule_or_exit",
    "print_error",
    "print_success",
    "print_separator",
    "print_header",
    "format_task_line",
]
