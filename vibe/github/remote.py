"""Remote URL parsing.

Supports both HTTPS and SSH formats:
- https://github.com/owner/repo.git
- https://github.com/owner/repo
- git@github.com:owner/repo.git
- git@github.com:owner/repo
"""

import re
from dataclasses import dataclass

from vibe.github.exceptions import RemoteURLError

SSH_PATTERN = re.compile(r"^git@github\.com[:/]([^/]+)/([^/]+?)(?:\.git)?$")
HTTPS_PATTERN = re.compile(r"^https?://github\.com/([^/]+)/([^/]+?)(?:\.git)?$")


@dataclass(frozen=True)
class RepoInfo:
    """Repository owner and name on GitHub."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_remote_url(url: str) -> RepoInfo:
    """Extract owner and repository name from a git remote URL.

    Args:
        url: The remote URL, surrounding whitespace allowed.

    Returns:
        The parsed RepoInfo.

    Raises:
        RemoteURLError: If the URL is not a GitHub SSH or HTTPS URL.
    """
    url = url.strip()
    for pattern in (SSH_PATTERN, HTTPS_PATTERN):
        match = pattern.match(url)
        if match:
            return RepoInfo(owner=match.group(1), name=match.group(2))
    raise RemoteURLError(url)
