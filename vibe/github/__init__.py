"""GitHub forge access for vibe."""

from vibe.github.base import ForgeClient, PullRequest
from vibe.github.client import GitHubClient, get_github_token
from vibe.github.exceptions import ForgeError, MissingTokenError, RemoteURLError
from vibe.github.remote import RepoInfo, parse_remote_url

__all__ = [
    "ForgeClient",
    "PullRequest",
    "GitHubClient",
    "get_github_token",
    "ForgeError",
    "MissingTokenError",
    "RemoteURLError",
    "RepoInfo",
    "parse_remote_url",
]
