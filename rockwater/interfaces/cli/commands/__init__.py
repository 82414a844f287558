"""CLI command groups for Rockwater.

Command groups:
- stack: Inspect a stack (schedule, rollup, min-duration)
- edit: Apply one edit to a stack file (done, anchor, scale, archive)
- config: Scheduler settings (show, set)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from rockwater.interfaces.cli.commands import config, edit, stack

__all__ = ["stack", "edit", "config"]
