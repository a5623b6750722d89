"""Read-only access to the git object store.

Contains:
- ObjectStore: Reads blobs by hash and resolves paths inside trees
- gitlink_content: Text of a submodule entry
"""

import logging

from git import Repo
from git.exc import BadName, BadObject, GitCommandError
from git.objects import Tree
from git.util import hex_to_bin

from vibe.git.exceptions import NotFoundError, StorageReadError

logger = logging.getLogger(__name__)

GITLINK_MODE = 0o160000


def gitlink_content(hexsha: str) -> bytes:
    """Render a submodule entry the way git diff shows it."""
    return f"Subproject commit {hexsha}\n".encode()


class ObjectStore:
    """Content-addressed reads against a repository's object database."""

    def __init__(self, repo: Repo):
        self.repo = repo

    def read_blob(self, hexsha: str) -> bytes:
        """Return the content of the blob with the given hash.

        Args:
            hexsha: 40-character hex object name.

        Returns:
            The raw blob bytes.

        Raises:
            NotFoundError: If no object with that hash exists.
            StorageReadError: If the object database cannot be read.
        """
        try:
            return self.repo.odb.stream(hex_to_bin(hexsha)).read()
        except (BadObject, BadName, ValueError) as e:
            logger.debug("Object %s not found: %s", hexsha, e)
            raise NotFoundError(f"object {hexsha}")
        except (GitCommandError, OSError) as e:
            raise StorageReadError(f"Failed to read object {hexsha}: {e}")

    def entry_at(self, tree: Tree, path: str):
        """Return the blob or submodule entry stored at path inside tree.

        Raises:
            NotFoundError: If the path does not exist or is a directory.
        """
        try:
            item = tree / path
        except KeyError:
            raise NotFoundError(f"path '{path}' in tree {tree.hexsha[:7]}")
        if item.type not in ("blob", "submodule"):
            raise NotFoundError(f"file '{path}' in tree {tree.hexsha[:7]}")
        return item

    def read_path(self, tree: Tree, path: str) -> bytes:
        """Return the content of the file at path inside tree.

        A submodule reads as its gitlink line, the same text git diff shows.
        """
        item = self.entry_at(tree, path)
        if item.type == "submodule":
            return gitlink_content(item.hexsha)
        return self.read_blob(item.hexsha)

    def tree_blobs(self, tree: Tree, include_submodules: bool = False) -> dict[str, str]:
        """Flatten a tree into a mapping of file path to object hash.

        Submodule entries point at commits in another repository. They are
        left out unless include_submodules is set.
        """
        wanted = ("blob", "submodule") if include_submodules else ("blob",)
        try:
            return {
                item.path: item.hexsha
                for item in tree.traverse()
                if item.type in wanted
            }
        except (GitCommandError, OSError, ValueError) as e:
            raise StorageReadError(f"Failed to walk tree {tree.hexsha[:7]}: {e}")
