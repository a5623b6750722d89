"""Git-related exception classes.

Contains all exception classes for repository operations:
- GitError: Base exception for git-related errors
- NoRepositoryError: Raised when no repository can be opened
- NotFoundError: Raised when a blob, path or reference is missing
- DetachedHeadError: Raised when HEAD does not point at a branch
- NoDefaultBranchError: Raised when neither main nor master can be found
- BaseBranchNotFoundError: Raised when the base branch cannot be resolved
- StorageReadError: Raised when the object store cannot be read
- NoStagedChangesError: Raised when there are no staged changes
- CommitError: Raised when a commit cannot be created
- PushError: Raised when a push is rejected or fails
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NoRepositoryError(GitError):
    """Raised when the path is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Not a git repository: {path}\n"
            "Please run this command from within a git repo."
        )


class NotFoundError(GitError):
    """Raised when a blob, tree path or reference does not exist."""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"Not found: {what}")


class DetachedHeadError(GitError):
    """Raised when HEAD is not on a branch."""

    def __init__(self):
        super().__init__("HEAD is not on a branch (detached HEAD)")


class NoDefaultBranchError(GitError):
    """Raised when no default branch can be determined."""

    def __init__(self):
        super().__init__("Could not determine default branch (no main or master found)")


class BaseBranchNotFoundError(GitError):
    """Raised when the base branch exists neither locally nor on origin."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Failed to find base branch '{branch}' (checked local and origin/{branch})")


class StorageReadError(GitError):
    """Raised when the object store or index cannot be read."""

    pass


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class CommitError(GitError):
    """Raised when a commit cannot be created."""

    pass


class PushError(GitError):
    """Raised when pushing to the remote fails."""

    pass
