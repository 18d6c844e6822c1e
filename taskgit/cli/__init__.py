"""CLI entry point for taskgit.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from taskgit import __version__
from taskgit.cli.add_diff import add_diff_command
from taskgit.cli.clean import clean_command
from taskgit.cli.config import config_app

# Main application
app = typer.Typer(
    name="taskgit",
    help="taskgit: interactive hunk staging for git",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"taskgit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the taskgit version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """taskgit: interactive hunk staging for git."""


# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("add-diff")(add_diff_command)
app.command("clean")(clean_command)


__all__ = [
    "app",
    "config_app",
    "add_diff_command",
    "clean_command",
]
