"""CLI command for creating a pull request with a generated description."""

from typing import Optional

import typer

from vibe.cli.prompt import TerminalPrompter
from vibe.cli.utils import fail, load_settings_or_exit, show_info
from vibe.confirm import ConfirmationWorkflow
from vibe.git import (
    BranchPair,
    GitError,
    GitRepository,
    NoDefaultBranchError,
    build_branch_diff,
    commits_ahead,
    current_branch,
    needs_push,
    resolve_branch_pair,
)
from vibe.github import ForgeError, GitHubClient, get_github_token, parse_remote_url
from vibe.llm import LLMError, get_provider


def pr_command(
    base: Optional[str] = typer.Option(
        None,
        "--base",
        "-b",
        help="Base branch to compare against (default: main or master, else the GitHub default)",
    ),
) -> None:
    """Create a GitHub PR with an AI-generated title and description.

    Compares the current branch with the base branch, asks the configured
    model for a title and description, shows them for review, then pushes
    the branch if needed and opens the pull request.

    Requires a GitHub remote named origin, a feature branch with commits
    ahead of the base, GITHUB_TOKEN, and an API key for the configured
    provider.
    """
    settings = load_settings_or_exit()

    try:
        provider = get_provider(settings)
        provider.get_api_key()
        token = get_github_token()

        repo = GitRepository.open()
        repo_info = parse_remote_url(repo.remote_url())
        client = GitHubClient(
            token,
            api_url=settings.github_api_url,
            timeout=settings.request_timeout,
        )

        try:
            branches = resolve_branch_pair(repo, base)
        except NoDefaultBranchError:
            show_info("No local main or master branch, asking GitHub for the default branch...")
            branches = BranchPair(
                current=current_branch(repo),
                base=client.get_default_branch(repo_info.owner, repo_info.name),
            )

        if branches.current == branches.base:
            fail(
                f"cannot create PR from {branches.base} branch\n\n"
                "Create a feature branch first:\n"
                "  git checkout -b feature/my-feature"
            )

        if not client.branch_exists(repo_info.owner, repo_info.name, branches.base):
            fail(
                f"base branch '{branches.base}' does not exist on "
                f"{repo_info.owner}/{repo_info.name}"
            )

        show_info(f"Analyzing branch '{branches.current}' against '{branches.base}'...")

        commits = commits_ahead(repo, branches.base)
        if not commits:
            fail(
                f"no commits ahead of {branches.base}\n\n"
                "Make some commits first, then run vibe pr again."
            )
        show_info(f"Found {len(commits)} commit(s) ahead of {branches.base}")

        diff = build_branch_diff(repo, branches.base)
        if not diff:
            fail(f"no changes found compared to {branches.base}")

        content = provider.generate_pr_content("\n".join(str(c) for c in commits), diff)
        outcome = ConfirmationWorkflow(TerminalPrompter(settings.editor)).run(content)

        if not outcome.confirmed:
            typer.echo("PR creation cancelled.", err=True)
            return

        if needs_push(repo):
            show_info("Pushing branch to origin...")
            repo.push(branches.current, token)

        show_info("Creating pull request...")
        pull_request = client.create_pull_request(
            repo_info.owner,
            repo_info.name,
            branches.base,
            branches.current,
            outcome.payload.title,
            outcome.payload.description,
        )

    except GitError as e:
        fail(f"Git error: {e}")
    except (LLMError, ForgeError) as e:
        fail(str(e))

    typer.echo(f"\nPR created: {pull_request.url}")
