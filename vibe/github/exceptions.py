"""Forge-related exception classes.

Contains:
- ForgeError: Base exception for forge API errors
- RemoteURLError: Raised when a remote URL is not a GitHub repository
- MissingTokenError: Raised when no GitHub token is configured
"""

from typing import Optional


class ForgeError(Exception):
    """Base exception for forge API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteURLError(ForgeError):
    """Raised when a remote URL cannot be parsed as a GitHub repository."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not parse GitHub remote URL: {url}")


class MissingTokenError(ForgeError):
    """Raised when the GitHub token is not set."""

    pass
