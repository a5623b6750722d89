"""Abstract repository storage interface.

The change-set builder and branch resolver only talk to this interface.
GitRepository in vibe.git.repository is the concrete adapter.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from vibe.git.models import Author, CommitInfo, StagingState, TreeChange


def branch_ref(name: str) -> str:
    """Full reference name of a local branch."""
    return f"refs/heads/{name}"


def remote_ref(remote: str, name: str) -> str:
    """Full reference name of a remote-tracking branch."""
    return f"refs/remotes/{remote}/{name}"


class RepositoryStorage(ABC):
    """Capabilities the core needs from a git repository."""

    @abstractmethod
    def staged_status(self) -> dict[str, StagingState]:
        """Return the staging state of every tracked path.

        The mapping preserves the order of the underlying status report.
        """
        pass

    @abstractmethod
    def has_head(self) -> bool:
        """Return True if the repository has at least one commit."""
        pass

    @abstractmethod
    def read_head_file(self, path: str) -> bytes:
        """Read a file from the last committed tree.

        Raises:
            NotFoundError: If there is no HEAD commit or no such path.
            StorageReadError: If the object store cannot be read.
        """
        pass

    @abstractmethod
    def read_index_file(self, path: str) -> bytes:
        """Read a file from the staged snapshot.

        Raises:
            NotFoundError: If the path is not in the index.
            StorageReadError: If the object store cannot be read.
        """
        pass

    @abstractmethod
    def head_branch(self) -> Optional[str]:
        """Return the short name of the checked-out branch, or None if detached."""
        pass

    @abstractmethod
    def head_hexsha(self) -> str:
        """Return the hash of the commit HEAD points at."""
        pass

    @abstractmethod
    def resolve_reference(self, name: str) -> Optional[str]:
        """Return the commit hash a full reference name points at, or None."""
        pass

    @abstractmethod
    def reference_names(self) -> list[str]:
        """Return the full names of all known references."""
        pass

    @abstractmethod
    def iter_commits(self, start: str) -> Iterator[CommitInfo]:
        """Walk history from start, newest first.

        Raises:
            StorageReadError: If traversal fails part way.
        """
        pass

    @abstractmethod
    def tree_changes(self, old_commit: str, new_commit: str) -> list[TreeChange]:
        """Compare the trees of two commits and return every differing path."""
        pass

    @abstractmethod
    def author(self) -> Author:
        """Return the identity used for new commits."""
        pass

    @abstractmethod
    def create_commit(self, message: str, author: Author) -> str:
        """Commit the staged snapshot and return the short hash."""
        pass

    @abstractmethod
    def remote_url(self, remote: str = "origin") -> str:
        """Return the first configured URL of a remote."""
        pass

    @abstractmethod
    def push(self, branch: str, token: str, remote: str = "origin") -> None:
        """Push a local branch to the same name on the remote."""
        pass
