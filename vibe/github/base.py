"""Abstract forge client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequest:
    """A created pull request."""

    number: int
    url: str


class ForgeClient(ABC):
    """Pull request operations a code forge must provide."""

    @abstractmethod
    def create_pull_request(
        self, owner: str, repo: str, base: str, head: str, title: str, body: str
    ) -> PullRequest:
        """Open a pull request from head into base."""
        pass

    @abstractmethod
    def get_default_branch(self, owner: str, repo: str) -> str:
        """Return the repository's default branch as configured on the forge."""
        pass

    @abstractmethod
    def branch_exists(self, owner: str, repo: str, branch: str) -> bool:
        """Return True if the branch exists on the forge."""
        pass
