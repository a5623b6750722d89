"""GitPython-backed repository storage.

Contains:
- GitRepository: RepositoryStorage adapter over git.Repo
- authenticated_url: Rewrite a remote URL to carry a token over HTTPS
"""

import logging
import os
import re
from pathlib import Path
from typing import Iterator, Optional, Union

from git import Actor, Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.refs.symbolic import SymbolicReference

from vibe.git.exceptions import (
    CommitError,
    GitError,
    NotFoundError,
    NoRepositoryError,
    PushError,
    StorageReadError,
)
from vibe.git.models import Author, CommitInfo, StagingState, TreeChange
from vibe.git.objects import GITLINK_MODE, ObjectStore, gitlink_content
from vibe.git.storage import RepositoryStorage

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR_NAME = "Vibe User"
DEFAULT_AUTHOR_EMAIL = "vibe@local"

_SCP_LIKE_URL = re.compile(r"^[\w.-]+@([\w.-]+):(.+)$")


def authenticated_url(url: str, token: str) -> str:
    """Rewrite a remote URL so that it authenticates with a token over HTTPS.

    SSH URLs in scp form (git@host:owner/repo.git) are converted to HTTPS.
    GitHub accepts any username with a token, x-access-token is conventional.

    Args:
        url: The configured remote URL.
        token: The access token.

    Returns:
        The HTTPS URL carrying the credentials.
    """
    url = url.strip()
    match = _SCP_LIKE_URL.match(url)
    if match:
        url = f"https://{match.group(1)}/{match.group(2)}"
    elif url.startswith("ssh://"):
        url = "https://" + url[len("ssh://"):].split("@", 1)[-1]
    if url.startswith("https://"):
        return f"https://x-access-token:{token}@{url[len('https://'):]}"
    return url


class GitRepository(RepositoryStorage):
    """Repository storage backed by a GitPython Repo."""

    def __init__(self, repo: Repo):
        self.repo = repo
        self.objects = ObjectStore(repo)
        self._index_entries: Optional[dict[str, str]] = None
        self._gitlinks: set[str] = set()
        self._unmerged: set[str] = set()

    @classmethod
    def open(cls, path: Union[str, Path, None] = None) -> "GitRepository":
        """Open the repository containing path (defaults to the working directory).

        Raises:
            NoRepositoryError: If path is not inside a git repository.
        """
        path = Path(path) if path else Path.cwd()
        try:
            repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise NoRepositoryError(str(path))
        return cls(repo)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def _load_index(self) -> None:
        try:
            entries = self.repo.index.entries
        except (OSError, ValueError) as e:
            raise StorageReadError(f"Failed to read the index: {e}")

        self._index_entries = {}
        self._gitlinks = set()
        self._unmerged = set()
        for (path, stage), entry in entries.items():
            if stage != 0:
                self._unmerged.add(path)
                continue
            self._index_entries[path] = entry.hexsha
            if entry.mode == GITLINK_MODE:
                self._gitlinks.add(path)

    def _index(self) -> dict[str, str]:
        """Stage-0 index entries as path -> object hash."""
        if self._index_entries is None:
            self._load_index()
        return self._index_entries

    def _forget_index(self) -> None:
        self._index_entries = None
        self._gitlinks = set()
        self._unmerged = set()

    def _head_tree(self):
        try:
            return self.repo.head.commit.tree
        except ValueError:
            raise NotFoundError("HEAD commit")

    def has_head(self) -> bool:
        return self.repo.head.is_valid()

    def staged_status(self) -> dict[str, StagingState]:
        index = self._index()
        if self.has_head():
            head_entries = self.objects.tree_blobs(self._head_tree(), include_submodules=True)
        else:
            head_entries = {}

        status: dict[str, StagingState] = {}
        for path, hexsha in index.items():
            committed = head_entries.get(path)
            if committed is None:
                status[path] = StagingState.ADDED
            elif committed != hexsha:
                status[path] = StagingState.MODIFIED
            else:
                status[path] = StagingState.UNMODIFIED
        for path in head_entries:
            if path in index:
                continue
            if path in self._unmerged:
                logger.debug("Skipping unmerged path %s", path)
                continue
            status[path] = StagingState.DELETED
        return status

    def read_head_file(self, path: str) -> bytes:
        return self.objects.read_path(self._head_tree(), path)

    def read_index_file(self, path: str) -> bytes:
        hexsha = self._index().get(path)
        if hexsha is None:
            raise NotFoundError(f"path '{path}' in index")
        if path in self._gitlinks:
            return gitlink_content(hexsha)
        return self.objects.read_blob(hexsha)


    # ------------------------------------------------------------------
    # References and history
    # ------------------------------------------------------------------

    def head_branch(self) -> Optional[str]:
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def head_hexsha(self) -> str:
        try:
            return self.repo.head.commit.hexsha
        except ValueError:
            raise NotFoundError("HEAD commit")

    def resolve_reference(self, name: str) -> Optional[str]:
        try:
            return SymbolicReference.dereference_recursive(self.repo, name)
        except (ValueError, OSError):
            return None

    def reference_names(self) -> list[str]:
        return [ref.path for ref in self.repo.refs]

    def iter_commits(self, start: str) -> Iterator[CommitInfo]:
        try:
            for commit in self.repo.iter_commits(start):
                yield CommitInfo(hexsha=commit.hexsha, message=commit.message)
        except (GitCommandError, ValueError, OSError) as e:
            raise StorageReadError(f"Failed to walk history from {start[:7]}: {e}")

    def tree_changes(self, old_commit: str, new_commit: str) -> list[TreeChange]:
        try:
            old_tree = self.repo.commit(old_commit).tree
            new_tree = self.repo.commit(new_commit).tree
        except (ValueError, GitCommandError) as e:
            raise StorageReadError(f"Failed to load commit trees: {e}")

        old_blobs = self.objects.tree_blobs(old_tree)
        new_blobs = self.objects.tree_blobs(new_tree)

        changes = []
        for path in sorted(set(old_blobs) | set(new_blobs)):
            old_sha = old_blobs.get(path)
            new_sha = new_blobs.get(path)
            if old_sha == new_sha:
                continue
            try:
                old_content = self.objects.read_blob(old_sha) if old_sha else None
                new_content = self.objects.read_blob(new_sha) if new_sha else None
            except (NotFoundError, StorageReadError) as e:
                logger.warning("Skipping %s in branch diff: %s", path, e)
                continue
            changes.append(
                TreeChange(
                    old_path=path if old_sha else None,
                    new_path=path if new_sha else None,
                    old_content=old_content,
                    new_content=new_content,
                )
            )
        return changes

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def author(self) -> Author:
        reader = self.repo.config_reader()
        name = reader.get_value("user", "name", default="")
        email = reader.get_value("user", "email", default="")
        return Author(
            name=str(name) or os.environ.get("GIT_AUTHOR_NAME") or DEFAULT_AUTHOR_NAME,
            email=str(email) or os.environ.get("GIT_AUTHOR_EMAIL") or DEFAULT_AUTHOR_EMAIL,
        )

    def create_commit(self, message: str, author: Author) -> str:
        actor = Actor(author.name, author.email)
        try:
            commit = self.repo.index.commit(message, author=actor, committer=actor)
        except (GitCommandError, ValueError, OSError) as e:
            raise CommitError(f"Failed to commit: {e}")
        self._forget_index()
        logger.debug("Created commit %s", commit.hexsha)
        return commit.hexsha[:7]

    def remote_url(self, remote: str = "origin") -> str:
        try:
            urls = list(self.repo.remote(remote).urls)
        except (ValueError, GitCommandError) as e:
            raise GitError(f"Failed to get {remote} remote: {e}")
        if not urls:
            raise GitError(f"No URLs configured for {remote} remote")
        return urls[0]

    def push(self, branch: str, token: str, remote: str = "origin") -> None:
        target = authenticated_url(self.remote_url(remote), token)
        refspec = f"refs/heads/{branch}:refs/heads/{branch}"
        logger.debug("Pushing %s to %s", refspec, remote)
        try:
            with self.repo.git.custom_environment(GIT_TERMINAL_PROMPT="0"):
                self.repo.git.push(target, refspec)
        except GitCommandError as e:
            message = str(e).replace(token, "***") if token else str(e)
            raise PushError(f"Failed to push: {message}")
