"""CLI interface for Rockwater using Typer.

Usage:
    rockwater schedule stack.json           # Show the computed schedule
    rockwater rollup stack.json TASK_ID     # Duration including subtasks
    rockwater done stack.json TASK_ID       # Toggle a task done/todo

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (stack, edit, config)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from rockwater import __version__
from rockwater.interfaces.cli.commands import config, edit, stack
from rockwater.interfaces.cli.common import NowOption, StackPath, configure_logging

app = typer.Typer(
    name="rockwater",
    help="Rock-and-water task scheduling",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rockwater version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """Rockwater - schedule anchored rocks and floating water.

    Anchored tasks keep their time; floating tasks fill the gaps
    around them, and completed tasks take up no time at all.
    """
    configure_logging(verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(stack.app, name="stack")
app.add_typer(edit.app, name="edit")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("schedule")
def schedule(
    stack_file: StackPath,
    now: NowOption = None,
    as_json: bool = typer.Option(False, "--json", help="Print the schedule as JSON"),
) -> None:
    """Show the schedule (shortcut for 'stack schedule')."""
    stack.schedule(stack_file, now=now, as_json=as_json)


@app.command("rollup")
def rollup(
    stack_file: StackPath,
    task_id: str = typer.Argument(..., help="Id of the task to inspect"),
) -> None:
    """Show a task's rolled-up duration (shortcut for 'stack rollup')."""
    stack.rollup(stack_file, task_id)


@app.command("done")
def done(
    stack_file: StackPath,
    task_id: str = typer.Argument(..., help="Id of a top-level task in the stack"),
    now: NowOption = None,
) -> None:
    """Toggle a task done/todo (shortcut for 'edit done')."""
    edit.done(stack_file, task_id, now=now)


__all__ = ["app"]
