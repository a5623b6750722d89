"""Shared utility functions for CLI commands."""

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import NoReturn, Optional

import typer

from vibe.config import Settings, load_settings
from vibe.global_config import GlobalConfigError


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def show_info(message: str) -> None:
    typer.echo(message, err=True)


def load_settings_or_exit() -> Settings:
    """Load settings, exiting with a readable error if the config is broken."""
    try:
        return load_settings()
    except (GlobalConfigError, ValueError) as e:
        fail(f"Invalid configuration: {e}")


def find_editor(preferred: Optional[str] = None) -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The editor from ~/.vibe/config.yaml
    2. $VISUAL, then $EDITOR
    3. nano, then vi

    Returns:
        List of command parts to run the editor.
    """
    for candidate in (preferred, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate:
            return candidate.split()

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    return ["vi"]


def open_editor(file_path: Path, preferred: Optional[str] = None) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
        preferred: Editor command from configuration, if any.
    """
    editor_cmd = find_editor(preferred)

    try:
        result = subprocess.run(editor_cmd + [str(file_path)], check=False)
        if result.returncode != 0:
            typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)
    except FileNotFoundError:
        fail(f"Editor not found: {editor_cmd[0]}")


def edit_text(initial: str, preferred: Optional[str] = None, suffix: str = ".md") -> str:
    """Let the user edit text in their editor and return the result.

    Args:
        initial: Text the file starts with.
        preferred: Editor command from configuration, if any.
        suffix: File suffix, for editor syntax highlighting.

    Returns:
        The edited text with surrounding whitespace removed.
    """
    with tempfile.TemporaryDirectory(prefix="vibe-") as tmpdir:
        path = Path(tmpdir) / f"VIBE_EDIT{suffix}"
        path.write_text(initial)
        open_editor(path, preferred)
        return path.read_text().strip()
