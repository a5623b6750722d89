"""Top-level CLI callback and the version command."""

import typer
from dotenv import find_dotenv, load_dotenv

from vibe import __version__
from vibe.cli.utils import configure_logging


def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        is_eager=True,
    ),
) -> None:
    """vibe: AI-generated commit messages and pull requests.

    Environment variables:
      OPENAI_API_KEY  - OpenAI API key (or ANTHROPIC_API_KEY for anthropic)
      GITHUB_TOKEN    - GitHub personal access token (pr command)
    """
    if version:
        version_command()
        raise typer.Exit(0)

    configure_logging(verbose)
    load_dotenv(find_dotenv(usecwd=True))

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def version_command() -> None:
    """Print the version information."""
    typer.echo(f"vibe version {__version__}")
