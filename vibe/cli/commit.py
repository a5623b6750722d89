"""CLI command for committing staged changes with a generated message."""

import typer

from vibe.cli.prompt import TerminalPrompter
from vibe.cli.utils import fail, load_settings_or_exit, show_info
from vibe.confirm import ConfirmationWorkflow
from vibe.git import (
    GitError,
    GitRepository,
    NoStagedChangesError,
    build_staged_diff,
    has_staged_changes,
)
from vibe.llm import LLMError, get_provider

NO_STAGED_CHANGES_HELP = """no staged changes found

To stage changes, use:
  git add <file>       # Stage specific file
  git add .            # Stage all changes
  git add -p           # Stage interactively"""


def commit_command() -> None:
    """Generate an AI commit message for staged changes.

    Analyzes the staged changes, asks the configured model for a commit
    message, shows it for review, and commits when you accept or edit it.

    Requires staged changes (git add) and an API key for the configured
    provider (OPENAI_API_KEY by default).
    """
    settings = load_settings_or_exit()

    try:
        provider = get_provider(settings)
        provider.get_api_key()

        repo = GitRepository.open()
        if not has_staged_changes(repo):
            raise NoStagedChangesError(NO_STAGED_CHANGES_HELP)

        show_info("Analyzing staged changes...")
        diff = build_staged_diff(repo)
        if not diff:
            fail("no diff content found for staged changes")

        message = provider.generate_commit_message(diff)
        outcome = ConfirmationWorkflow(TerminalPrompter(settings.editor)).run(message)

        if not outcome.confirmed:
            typer.echo("Commit cancelled.", err=True)
            return

        short_hash = repo.create_commit(outcome.payload, repo.author())

    except NoStagedChangesError as e:
        fail(str(e))
    except GitError as e:
        fail(f"Git error: {e}")
    except LLMError as e:
        fail(str(e))

    typer.echo(f"\nCommitted: {short_hash}")
    typer.echo(f"\n  {outcome.payload}")
