"""Tests for vibe.github package."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from vibe.github import (
    ForgeError,
    GitHubClient,
    MissingTokenError,
    PullRequest,
    RemoteURLError,
    RepoInfo,
    get_github_token,
    parse_remote_url,
)


def _response(status_code=200, payload=None, reason="OK"):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    return response


class TestParseRemoteURL:
    """Tests for parse_remote_url function."""

    @pytest.mark.parametrize(
        "url",
        [
            "git@github.com:acme/widgets.git",
            "git@github.com:acme/widgets",
            "https://github.com/acme/widgets",
            "https://github.com/acme/widgets.git",
            "http://github.com/acme/widgets.git",
            "  https://github.com/acme/widgets.git\n",
        ],
    )
    def test_github_urls(self, url):
        """Test that SSH and HTTPS GitHub URLs yield owner and name."""
        info = parse_remote_url(url)
        assert info == RepoInfo(owner="acme", name="widgets")
        assert info.full_name == "acme/widgets"

    @pytest.mark.parametrize(
        "url",
        [
            "https://gitlab.com/acme/widgets",
            "git@bitbucket.org:acme/widgets.git",
            "https://github.com/acme",
            "",
        ],
    )
    def test_other_urls_fail(self, url):
        """Test that non-GitHub or malformed URLs raise RemoteURLError."""
        with pytest.raises(RemoteURLError):
            parse_remote_url(url)

    def test_repo_name_with_dots(self):
        """Test that only a trailing .git is dropped from the name."""
        assert parse_remote_url("https://github.com/acme/widgets.js.git").name == "widgets.js"


class TestGetGitHubToken:
    """Tests for get_github_token function."""

    def test_from_environment(self):
        """Test reading the token from GITHUB_TOKEN."""
        with patch.dict(os.environ, {"GITHUB_TOKEN": "ghp_env"}):
            assert get_github_token() == "ghp_env"

    def test_from_credentials_file(self, mocker):
        """Test falling back to ~/.vibe/credentials."""
        mocker.patch("vibe.global_config.get_credential", return_value="ghp_file")
        with patch.dict(os.environ, {}, clear=True):
            assert get_github_token() == "ghp_file"

    def test_missing_token(self, mocker):
        """Test that a missing token raises MissingTokenError."""
        mocker.patch("vibe.global_config.get_credential", return_value=None)
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(MissingTokenError) as exc_info:
                get_github_token()
        assert "GITHUB_TOKEN" in str(exc_info.value)


class TestGitHubClient:
    """Tests for GitHubClient class."""

    def _client(self, response=None, side_effect=None):
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        session.request.return_value = response
        session.request.side_effect = side_effect
        return GitHubClient("ghp_test", timeout=5.0, session=session), session

    def test_sets_auth_headers(self):
        """Test that the token and API version headers are sent."""
        _, session = self._client()
        assert session.headers["Authorization"] == "Bearer ghp_test"
        assert session.headers["Accept"] == "application/vnd.github+json"

    def test_create_pull_request(self):
        """Test creating a pull request."""
        response = _response(201, {"number": 42, "html_url": "https://github.com/acme/widgets/pull/42"})
        client, session = self._client(response)

        pr = client.create_pull_request("acme", "widgets", "main", "feature", "Add x", "Body")

        assert pr == PullRequest(number=42, url="https://github.com/acme/widgets/pull/42")
        session.request.assert_called_once_with(
            "POST",
            "https://api.github.com/repos/acme/widgets/pulls",
            timeout=5.0,
            json={"title": "Add x", "body": "Body", "head": "feature", "base": "main"},
        )

    def test_create_pull_request_error(self):
        """Test that a rejected request raises ForgeError with GitHub's message."""
        response = _response(
            422,
            {
                "message": "Validation Failed",
                "errors": [{"message": "A pull request already exists for acme:feature."}],
            },
            reason="Unprocessable Entity",
        )
        client, _ = self._client(response)

        with pytest.raises(ForgeError) as exc_info:
            client.create_pull_request("acme", "widgets", "main", "feature", "Add x", "Body")

        assert exc_info.value.status_code == 422
        assert "Validation Failed" in str(exc_info.value)
        assert "already exists" in str(exc_info.value)

    def test_get_default_branch(self):
        """Test reading the default branch."""
        client, session = self._client(_response(200, {"default_branch": "trunk"}))

        assert client.get_default_branch("acme", "widgets") == "trunk"
        assert session.request.call_args[0] == ("GET", "https://api.github.com/repos/acme/widgets")

    def test_branch_exists(self):
        """Test that a 200 means the branch exists."""
        client, _ = self._client(_response(200, {"name": "feature"}))
        assert client.branch_exists("acme", "widgets", "feature") is True

    def test_branch_missing(self):
        """Test that a 404 means the branch does not exist."""
        client, _ = self._client(_response(404, {"message": "Branch not found"}, reason="Not Found"))
        assert client.branch_exists("acme", "widgets", "feature") is False

    def test_branch_check_server_error(self):
        """Test that other failures raise ForgeError."""
        client, _ = self._client(_response(500, {}, reason="Server Error"))
        with pytest.raises(ForgeError):
            client.branch_exists("acme", "widgets", "feature")

    def test_timeout(self):
        """Test that a request timeout raises ForgeError."""
        client, _ = self._client(side_effect=requests.Timeout("slow"))
        with pytest.raises(ForgeError) as exc_info:
            client.get_default_branch("acme", "widgets")
        assert "timed out" in str(exc_info.value)

    def test_connection_error(self):
        """Test that a network failure raises ForgeError."""
        client, _ = self._client(side_effect=requests.ConnectionError("refused"))
        with pytest.raises(ForgeError) as exc_info:
            client.get_default_branch("acme", "widgets")
        assert "Network error" in str(exc_info.value)

    def test_custom_api_url(self):
        """Test that a trailing slash on the API URL is ignored."""
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        session.request.return_value = _response(200, {"default_branch": "main"})
        client = GitHubClient("t", api_url="https://ghe.example.com/api/v3/", session=session)

        client.get_default_branch("acme", "widgets")

        assert session.request.call_args[0][1] == "https://ghe.example.com/api/v3/repos/acme/widgets"
