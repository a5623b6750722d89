"""GitHub REST API client."""

import logging
import os
from typing import Optional

import requests

from vibe.config import DEFAULT_GITHUB_API_URL, DEFAULT_REQUEST_TIMEOUT, GITHUB_TOKEN_ENV_VAR
from vibe.github.base import ForgeClient, PullRequest
from vibe.github.exceptions import ForgeError, MissingTokenError

logger = logging.getLogger(__name__)


def get_github_token() -> str:
    """Get the GitHub token from the environment or credentials file.

    Raises:
        MissingTokenError: If no token is configured.
    """
    token = os.getenv(GITHUB_TOKEN_ENV_VAR)
    if token:
        return token

    from vibe.global_config import GlobalConfigError, get_credential

    try:
        token = get_credential(GITHUB_TOKEN_ENV_VAR)
    except GlobalConfigError as e:
        logger.warning("Could not read credentials file: %s", e)
        token = None
    if token:
        return token

    raise MissingTokenError(
        f"{GITHUB_TOKEN_ENV_VAR} environment variable is not set.\n\n"
        f"To fix this:\n"
        f'  export {GITHUB_TOKEN_ENV_VAR}="your-token"\n\n'
        f"Create a token at: https://github.com/settings/tokens\n"
        f"Required scope: repo"
    )


class GitHubClient(ForgeClient):
    """GitHub client using a personal access token."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            raise ForgeError("GitHub request timed out - please try again")
        except requests.RequestException as e:
            raise ForgeError(f"Network error talking to GitHub: {e}")

    @staticmethod
    def _raise_for_status(response: requests.Response, action: str) -> None:
        if response.ok:
            return
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message = payload.get("message") or response.reason
        details = "; ".join(
            err.get("message", "") for err in payload.get("errors", []) if isinstance(err, dict)
        )
        if details:
            message = f"{message} ({details})"
        raise ForgeError(
            f"Failed to {action}: {response.status_code} {message}",
            status_code=response.status_code,
        )

    def create_pull_request(
        self, owner: str, repo: str, base: str, head: str, title: str, body: str
    ) -> PullRequest:
        """Create a new pull request.

        Raises:
            ForgeError: If GitHub rejects the request.
        """
        response = self._request(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        self._raise_for_status(response, "create pull request")
        data = response.json()
        return PullRequest(number=data["number"], url=data["html_url"])

    def get_default_branch(self, owner: str, repo: str) -> str:
        """Fetch the default branch for a repository."""
        response = self._request("GET", f"/repos/{owner}/{repo}")
        self._raise_for_status(response, "get repository info")
        return response.json()["default_branch"]

    def branch_exists(self, owner: str, repo: str, branch: str) -> bool:
        """Check if a branch exists on GitHub. A 404 means it does not."""
        response = self._request("GET", f"/repos/{owner}/{repo}/branches/{branch}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response, "check branch")
        return True
