"""Branch and commit utilities.

Contains:
- current_branch: Get the current branch name
- default_branch: Detect the base branch (main or master)
- resolve_base: Resolve a base branch name to its tip commit
- resolve_branch_pair: Current branch plus base branch
- commits_ahead: Commits on HEAD that are not on the base branch
- needs_push: Whether the current branch differs from its remote copy
"""

import logging
from typing import Optional

from vibe.git.exceptions import (
    BaseBranchNotFoundError,
    DetachedHeadError,
    NoDefaultBranchError,
    StorageReadError,
)
from vibe.git.models import BranchPair, CommitRef
from vibe.git.storage import RepositoryStorage, branch_ref, remote_ref

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


def current_branch(storage: RepositoryStorage) -> str:
    """Get the current branch name.

    Raises:
        DetachedHeadError: If HEAD does not point at a branch.
    """
    branch = storage.head_branch()
    if not branch:
        raise DetachedHeadError()
    return branch


def default_branch(storage: RepositoryStorage) -> str:
    """Detect the default branch of the repository.

    Checks, in order: a local 'main', a local 'master', then any reference
    whose name contains 'origin/main' or 'origin/master'. An origin/main match
    wins immediately; an origin/master match is kept while the scan continues.

    Raises:
        NoDefaultBranchError: If none of the candidates exist.
    """
    for name in ("main", "master"):
        if storage.resolve_reference(branch_ref(name)) is not None:
            return name

    found = None
    for ref_name in storage.reference_names():
        if "origin/main" in ref_name:
            return "main"
        if "origin/master" in ref_name:
            found = "master"

    if found:
        return found
    raise NoDefaultBranchError()


def resolve_base(storage: RepositoryStorage, base: str) -> str:
    """Resolve a base branch to its tip hash, preferring the local branch.

    Raises:
        BaseBranchNotFoundError: If neither refs/heads/<base> nor
            refs/remotes/origin/<base> exists.
    """
    sha = storage.resolve_reference(branch_ref(base))
    if sha is None:
        sha = storage.resolve_reference(remote_ref(DEFAULT_REMOTE, base))
    if sha is None:
        raise BaseBranchNotFoundError(base)
    return sha


def resolve_branch_pair(storage: RepositoryStorage, base: Optional[str] = None) -> BranchPair:
    """Return the current branch and the base it should be compared against.

    Args:
        storage: The repository.
        base: Explicit base branch. Detected with default_branch() if omitted.
    """
    return BranchPair(current=current_branch(storage), base=base or default_branch(storage))


def commits_ahead(storage: RepositoryStorage, base: str) -> list[CommitRef]:
    """Get the commits on HEAD that are not on the base branch.

    History is walked newest first and the walk stops before the base tip.
    If the walk never meets the base tip (diverged history) every visited
    commit is returned.

    Args:
        storage: The repository.
        base: Base branch name.

    Returns:
        The commits ahead, newest first.

    Raises:
        BaseBranchNotFoundError: If the base branch cannot be resolved.
        StorageReadError: If traversal fails before any commit was collected.
    """
    base_sha = resolve_base(storage, base)

    commits = []
    try:
        for commit in storage.iter_commits(storage.head_hexsha()):
            if commit.hexsha == base_sha:
                break
            first_line = commit.message.split("\n")[0]
            commits.append(CommitRef(short_hash=commit.hexsha[:7], first_line=first_line))
        else:
            logger.debug("History of HEAD never reached %s (%s)", base, base_sha[:7])
    except StorageReadError:
        if not commits:
            raise
        logger.warning("History walk stopped early after %d commit(s)", len(commits))

    return commits


def needs_push(storage: RepositoryStorage, remote: str = DEFAULT_REMOTE) -> bool:
    """Check if the current branch has commits not yet on the remote.

    Returns:
        True if there is no remote-tracking branch, or its tip differs.
    """
    branch = current_branch(storage)
    remote_sha = storage.resolve_reference(remote_ref(remote, branch))
    if remote_sha is None:
        return True
    return remote_sha != storage.head_hexsha()
