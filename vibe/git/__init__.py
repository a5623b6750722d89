"""Repository access for vibe.

This package provides diff synthesis and branch inspection with:
- exceptions: GitError and its subclasses
- models: StagingState, ChangeKind, FileChange, CommitRef, BranchPair, ...
- objects: ObjectStore
- storage: RepositoryStorage (interface)
- repository: GitRepository (GitPython adapter)
- changes: build_staged_diff, build_branch_diff, presence_set_diff
- branch: current_branch, default_branch, commits_ahead, needs_push
"""

# Exceptions
from vibe.git.exceptions import (
    GitError,
    NoRepositoryError,
    NotFoundError,
    DetachedHeadError,
    NoDefaultBranchError,
    BaseBranchNotFoundError,
    StorageReadError,
    NoStagedChangesError,
    CommitError,
    PushError,
)

# Models
from vibe.git.models import (
    Author,
    BranchPair,
    ChangeKind,
    CommitInfo,
    CommitRef,
    FileChange,
    StagingState,
    TreeChange,
)

# Storage
from vibe.git.storage import RepositoryStorage
from vibe.git.repository import GitRepository

# Branch utilities
from vibe.git.branch import (
    current_branch,
    default_branch,
    resolve_base,
    resolve_branch_pair,
    commits_ahead,
    needs_push,
)

# Diff utilities
from vibe.git.changes import (
    has_staged_changes,
    build_staged_changes,
    render_staged_diff,
    build_staged_diff,
    presence_set_diff,
    build_branch_diff,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoRepositoryError",
    "NotFoundError",
    "DetachedHeadError",
    "NoDefaultBranchError",
    "BaseBranchNotFoundError",
    "StorageReadError",
    "NoStagedChangesError",
    "CommitError",
    "PushError",
    # Models
    "Author",
    "BranchPair",
    "ChangeKind",
    "CommitInfo",
    "CommitRef",
    "FileChange",
    "StagingState",
    "TreeChange",
    # Storage
    "RepositoryStorage",
    "GitRepository",
    # Branch
    "current_branch",
    "default_branch",
    "resolve_base",
    "resolve_branch_pair",
    "commits_ahead",
    "needs_push",
    # Diff
    "has_staged_changes",
    "build_staged_changes",
    "render_staged_diff",
    "build_staged_diff",
    "presence_set_diff",
    "build_branch_diff",
]
