"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from typing import Iterator, Optional

import pytest

from vibe.config import Settings
from vibe.git.exceptions import NotFoundError, StorageReadError
from vibe.git.models import Author, CommitInfo, StagingState, TreeChange
from vibe.git.storage import RepositoryStorage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, mocker):
    """Point ~/.vibe at a temporary directory for every test."""
    config_dir = tmp_path / ".vibe"
    mocker.patch("vibe.global_config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings()


class FakeStorage(RepositoryStorage):
    """In-memory repository storage.

    Files are given as path -> bytes. A value of None in head_files or
    index_files makes that read fail with StorageReadError.
    """

    def __init__(
        self,
        status: Optional[dict] = None,
        head_files: Optional[dict] = None,
        index_files: Optional[dict] = None,
        has_head: bool = True,
        branch: Optional[str] = "feature",
        head: str = "h" * 40,
        refs: Optional[dict] = None,
        commits: Optional[list] = None,
        fail_after: Optional[int] = None,
        tree_changes: Optional[list] = None,
        remote: str = "git@github.com:acme/widgets.git",
    ):
        self.status = status or {}
        self.head_files = head_files or {}
        self.index_files = index_files or {}
        self._has_head = has_head
        self.branch = branch
        self.head = head
        self.refs = refs or {}
        self.commits = commits or []
        self.fail_after = fail_after
        self.changes = tree_changes or []
        self.remote = remote
        self.commit_calls = []
        self.push_calls = []
        self.tree_change_calls = []

    @staticmethod
    def _read(files: dict, path: str) -> bytes:
        if path not in files:
            raise NotFoundError(path)
        if files[path] is None:
            raise StorageReadError(f"corrupt object for {path}")
        return files[path]

    def staged_status(self) -> dict[str, StagingState]:
        return dict(self.status)

    def has_head(self) -> bool:
        return self._has_head

    def read_head_file(self, path: str) -> bytes:
        if not self._has_head:
            raise NotFoundError("HEAD commit")
        return self._read(self.head_files, path)

    def read_index_file(self, path: str) -> bytes:
        return self._read(self.index_files, path)

    def head_branch(self) -> Optional[str]:
        return self.branch

    def head_hexsha(self) -> str:
        return self.head

    def resolve_reference(self, name: str) -> Optional[str]:
        return self.refs.get(name)

    def reference_names(self) -> list[str]:
        return list(self.refs)

    def iter_commits(self, start: str) -> Iterator[CommitInfo]:
        for i, commit in enumerate(self.commits):
            if self.fail_after is not None and i >= self.fail_after:
                raise StorageReadError("history walk failed")
            yield commit

    def tree_changes(self, old_commit: str, new_commit: str) -> list[TreeChange]:
        self.tree_change_calls.append((old_commit, new_commit))
        return list(self.changes)

    def author(self) -> Author:
        return Author(name="Test User", email="test@example.com")

    def create_commit(self, message: str, author: Author) -> str:
        self.commit_calls.append((message, author))
        return "abc1234"

    def remote_url(self, remote: str = "origin") -> str:
        return self.remote

    def push(self, branch: str, token: str, remote: str = "origin") -> None:
        self.push_calls.append((branch, remote))


@pytest.fixture
def fake_storage_cls():
    """The in-memory RepositoryStorage class."""
    return FakeStorage
