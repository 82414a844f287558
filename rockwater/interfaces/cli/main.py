"""Entry point for the Rockwater CLI.

Usage:
    python -m rockwater.interfaces.cli.main

Or via installed entry point:
    rockwater <command>
"""

from rockwater.interfaces.cli import app


def main() -> None:
    """Run the Rockwater CLI application."""
    app()


if __name__ == "__main__":
    main()
