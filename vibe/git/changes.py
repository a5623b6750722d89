"""Staged and branch diffs synthesized from repository objects.

Contains:
- has_staged_changes: Check whether anything is staged
- build_staged_changes: Classify staged entries into FileChange records
- render_staged_diff: Render a change set as a diff document
- build_staged_diff: Staged changes of a repository as a diff document
- presence_set_diff: Line-presence comparison used for modified files
- build_branch_diff: Tree-to-tree patch between a base branch and HEAD

The staged diff is an intermediate artifact for the language model, not a
patch that `git apply` would accept: there are no hunk headers and modified
files use the presence-set comparison below.
"""

import difflib
import logging

from vibe.git.branch import resolve_base
from vibe.git.exceptions import NotFoundError, StorageReadError
from vibe.git.models import ChangeKind, FileChange, StagingState, TreeChange
from vibe.git.storage import RepositoryStorage

logger = logging.getLogger(__name__)

_KIND_BY_STATE = {
    StagingState.ADDED: ChangeKind.ADDED,
    StagingState.MODIFIED: ChangeKind.MODIFIED,
    StagingState.DELETED: ChangeKind.DELETED,
}


def _lines(content: bytes) -> list[str]:
    return content.decode("utf-8", errors="replace").splitlines()


def has_staged_changes(storage: RepositoryStorage) -> bool:
    """Return True if any path is staged (added, modified or deleted)."""
    return any(state in _KIND_BY_STATE for state in storage.staged_status().values())


def _read(read, path: str, side: str):
    try:
        return read(path)
    except (NotFoundError, StorageReadError) as e:
        logger.warning("Could not read %s content of %s: %s", side, path, e)
        return None


def build_staged_changes(storage: RepositoryStorage) -> list[FileChange]:
    """Classify every staged entry and load its old and new content.

    Unmodified and untracked entries are skipped. Entries are returned in the
    order of the status report. An unreadable side is left as None so that
    one bad entry does not fail the whole change set.

    Args:
        storage: The repository to read from.

    Returns:
        The ordered change set.
    """
    has_head = storage.has_head()
    changes = []

    for path, state in storage.staged_status().items():
        kind = _KIND_BY_STATE.get(state)
        if kind is None:
            continue

        old_content = None
        new_content = None
        if kind in (ChangeKind.MODIFIED, ChangeKind.DELETED) and has_head:
            old_content = _read(storage.read_head_file, path, "committed")
        if kind in (ChangeKind.ADDED, ChangeKind.MODIFIED):
            new_content = _read(storage.read_index_file, path, "staged")

        changes.append(FileChange(path, kind, old_content, new_content))

    return changes


def presence_set_diff(old_lines: list[str], new_lines: list[str]) -> list[str]:
    """Compare two line lists by membership rather than position.

    Emits every old line missing from the new lines (prefixed '-'), then every
    new line missing from the old lines (prefixed '+'), each in original order.

    This is not a minimal edit script. A line that only moved is not reported,
    and duplicated lines collapse to a single membership test. The output of
    the commit flow depends on this exact behavior, so it is kept as is.
    """
    old_set = set(old_lines)
    new_set = set(new_lines)
    removed = [f"-{line}" for line in old_lines if line not in new_set]
    added = [f"+{line}" for line in new_lines if line not in old_set]
    return removed + added


def _render_change(change: FileChange) -> list[str]:
    lines = [f"diff --git a/{change.path} b/{change.path}"]

    if change.kind is ChangeKind.ADDED:
        lines.append("new file")
        if change.new_content is not None:
            lines.extend(f"+{line}" for line in _lines(change.new_content))

    elif change.kind is ChangeKind.DELETED:
        lines.append("deleted file")
        if change.old_content is not None:
            lines.extend(f"-{line}" for line in _lines(change.old_content))

    elif change.new_content is not None:
        old_lines = _lines(change.old_content) if change.old_content is not None else []
        lines.extend(presence_set_diff(old_lines, _lines(change.new_content)))

    return lines


def render_staged_diff(changes: list[FileChange]) -> str:
    """Render a change set as a diff document, one block per file."""
    blocks = []
    for change in changes:
        blocks.append("\n".join(_render_change(change)) + "\n\n")
    return "".join(blocks)


def build_staged_diff(storage: RepositoryStorage) -> str:
    """Return the staged changes of a repository as a diff document.

    Returns an empty string when nothing is staged.
    """
    changes = build_staged_changes(storage)
    logger.debug("Built staged change set with %d file(s)", len(changes))
    return render_staged_diff(changes)


def _tree_change_patch(change: TreeChange) -> str:
    path = change.path
    header = [f"diff --git a/{path} b/{path}"]
    if change.old_path is None:
        header.append("new file")
    elif change.new_path is None:
        header.append("deleted file")

    old_lines = _lines(change.old_content) if change.old_content is not None else []
    new_lines = _lines(change.new_content) if change.new_content is not None else []
    patch = difflib.unified_diff(
        old_lines,
        new_lines,
        fromfile=f"a/{path}" if change.old_path else "/dev/null",
        tofile=f"b/{path}" if change.new_path else "/dev/null",
        lineterm="",
    )
    return "\n".join(header + list(patch)) + "\n"


def build_branch_diff(storage: RepositoryStorage, base: str) -> str:
    """Return the patch between the base branch tip and HEAD.

    Unlike the staged diff this is a real tree comparison, and each changed
    path is rendered as a unified patch.

    Args:
        storage: The repository to read from.
        base: Base branch name (local, or on origin).

    Returns:
        The concatenated patches, empty if the trees are identical.

    Raises:
        BaseBranchNotFoundError: If the base branch cannot be resolved.
    """
    base_sha = resolve_base(storage, base)
    changes = storage.tree_changes(base_sha, storage.head_hexsha())
    logger.debug("Branch diff against %s covers %d path(s)", base, len(changes))
    return "".join(_tree_change_patch(change) for change in changes)
