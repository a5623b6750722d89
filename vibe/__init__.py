"""AI-assisted commit messages and pull requests for git repositories."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("vibe-git")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
