"""Data models for repository state and change sets.

Contains:
- StagingState: Index state of a path relative to the HEAD tree
- ChangeKind: Classification of a staged file change
- FileChange: One staged file with its old and new content
- CommitInfo: A commit as yielded by history traversal
- CommitRef: A commit summarized for prompts (short hash + subject)
- TreeChange: One path that differs between two trees
- BranchPair: The current branch and the base it is compared against
- Author: Commit author identity
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StagingState(Enum):
    """Index state of a path relative to the last commit."""

    UNMODIFIED = "unmodified"
    UNTRACKED = "untracked"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class ChangeKind(Enum):
    """Kind of a staged file change."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileChange:
    """A single staged file change.

    Content is None when the side does not exist (added/deleted files) or
    could not be read from the object store.
    """

    path: str
    kind: ChangeKind
    old_content: Optional[bytes] = None
    new_content: Optional[bytes] = None


@dataclass(frozen=True)
class CommitInfo:
    """A commit yielded by history traversal."""

    hexsha: str
    message: str


@dataclass(frozen=True)
class CommitRef:
    """A commit ahead of the base branch."""

    short_hash: str
    first_line: str

    def __str__(self) -> str:
        return f"{self.short_hash} {self.first_line}"


@dataclass(frozen=True)
class TreeChange:
    """A path that differs between two trees.

    old_path is None for added files, new_path is None for deleted files.
    """

    old_path: Optional[str]
    new_path: Optional[str]
    old_content: Optional[bytes] = None
    new_content: Optional[bytes] = None

    @property
    def path(self) -> str:
        return self.new_path or self.old_path


@dataclass(frozen=True)
class BranchPair:
    """The branch being proposed and the base it targets."""

    current: str
    base: str


@dataclass(frozen=True)
class Author:
    """Commit author identity."""

    name: str
    email: str
