"""Configuration CLI commands.

Show and change the duration limits applied when rescaling tasks.
"""

from typing import Optional

import typer
from pydantic import ValidationError

from rockwater.config import SchedulerSettings, get_config_dir, get_settings, save_settings
from rockwater.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Scheduler configuration")


@app.command("show")
def show() -> None:
    """Show the current scheduler settings."""
    settings = get_settings()
    typer.echo(f"Config: {get_config_dir() / 'config.json'}")
    typer.echo(f"min_duration: {settings.min_duration}m")
    cap = f"{settings.max_duration}m" if settings.max_duration is not None else "none"
    typer.echo(f"max_duration: {cap}")


@app.command("set")
def set_limits(
    min_duration: Optional[int] = typer.Option(None, "--min", help="Duration floor in minutes"),
    max_duration: Optional[int] = typer.Option(None, "--max", help="Duration cap in minutes"),
    clear_max: bool = typer.Option(False, "--no-max", help="Remove the duration cap"),
) -> None:
    """Update the duration floor and cap."""
    data = get_settings().model_dump()
    if min_duration is not None:
        data["min_duration"] = min_duration
    if max_duration is not None:
        data["max_duration"] = max_duration
    if clear_max:
        data["max_duration"] = None

    try:
        settings = SchedulerSettings(**data)
    except ValidationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(1) from e

    save_settings(settings)
    print_success("Settings saved.")
