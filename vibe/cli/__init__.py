"""CLI entry point for vibe.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from vibe.cli.commit import commit_command
from vibe.cli.config import config_app
from vibe.cli.main import main_callback, version_command
from vibe.cli.pr import pr_command

# Main application
app = typer.Typer(
    name="vibe",
    help="vibe: AI-powered Git CLI for commits and PRs",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("commit")(commit_command)
app.command("pr")(pr_command)
app.command("version")(version_command)

app.callback(invoke_without_command=True)(main_callback)


__all__ = [
    "app",
    "config_app",
    "commit_command",
    "pr_command",
    "version_command",
    "main_callback",
]
