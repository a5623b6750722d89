"""Base classes and shared utilities for LLM providers."""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from vibe.config import LLMProvider, Settings, get_api_key_env_var
from vibe.llm.exceptions import LLMError, MissingAPIKeyError
from vibe.llm.parsing import PRContent, parse_commit_message, parse_pr_content
from vibe.llm.prompts import (
    COMMIT_SYSTEM_PROMPT,
    COMMIT_USER_PROMPT_TEMPLATE,
    PR_SYSTEM_PROMPT,
    PR_USER_PROMPT_TEMPLATE,
)

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n[diff truncated due to length]"


@dataclass
class LLMResult:
    """Result from an LLM completion call, including token usage."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int


def truncate_diff(diff: str, max_chars: int) -> str:
    """Cut a diff to max_chars characters and mark the cut.

    Args:
        diff: The diff text.
        max_chars: Maximum number of diff characters to keep.

    Returns:
        The diff, unchanged if it fits.
    """
    if len(diff) <= max_chars:
        return diff
    logger.debug("Truncating diff from %d to %d characters", len(diff), max_chars)
    return diff[:max_chars] + TRUNCATION_MARKER


# User-facing explanations for common API failures, keyed by failure kind
API_ERROR_MESSAGES = {
    "auth": (
        "invalid {name} API key\n\n"
        "Please check your {env_var}:\n"
        "  1. Verify the key is correct\n"
        "  2. Make sure the key hasn't been revoked\n"
        "  3. Check that your .env file has the correct format: {env_var}=..."
    ),
    "rate_limit": (
        "{name} API rate limit exceeded\n\n"
        "You've made too many requests. Wait a few minutes and try again."
    ),
    "quota": (
        "{name} API quota exceeded\n\n"
        "Your API key has run out of credits. Check your billing settings."
    ),
    "context_length": "the diff is too large for the AI model - try staging fewer files",
    "timeout": "request timed out - please check your internet connection and try again",
    "connection": "network error - please check your internet connection: {error}",
    "unavailable": "{name} service is temporarily unavailable - please try again in a few minutes",
    "other": "{name} API call failed: {error}",
}


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses implement complete(); prompting, diff truncation and reply
    parsing are shared.
    """

    provider: LLMProvider
    display_name: str

    def __init__(self, settings: Settings, api_key: Optional[str] = None):
        """Initialize the provider.

        Args:
            settings: Resolved settings (model, limits, timeout).
            api_key: Explicit API key. Looked up on first use if omitted.
        """
        self.settings = settings
        self.model = settings.model
        self._api_key = api_key

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        """Send one system + user prompt pair and return the reply.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For API failures or an empty reply.
        """
        pass

    def get_api_key(self) -> str:
        """Get the API key from the constructor, environment or credentials file.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        if self._api_key:
            return self._api_key
        self._api_key = self._lookup_api_key(get_api_key_env_var(self.provider))
        return self._api_key

    def _lookup_api_key(self, env_var_name: str) -> str:
        # First check environment variable
        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        # Then check credentials file
        from vibe.global_config import GlobalConfigError, get_credential

        try:
            api_key = get_credential(env_var_name)
        except GlobalConfigError as e:
            logger.warning("Could not read credentials file: %s", e)
            api_key = None
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{env_var_name} environment variable is not set.\n\n"
            f"To fix this:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: vibe config set-key {self.provider.value}"
        )

    def api_error(self, kind: str, error: Exception) -> LLMError:
        """Build a user-facing LLMError for a failed API call."""
        template = API_ERROR_MESSAGES.get(kind, API_ERROR_MESSAGES["other"])
        return LLMError(
            template.format(
                name=self.display_name,
                env_var=get_api_key_env_var(self.provider),
                error=error,
            )
        )

    def generate_commit_message(self, diff: str) -> str:
        """Generate a commit message for a staged diff.

        Args:
            diff: The staged diff document.

        Returns:
            The cleaned up commit message.
        """
        diff = truncate_diff(diff, self.settings.max_diff_chars)
        result = self.complete(
            COMMIT_SYSTEM_PROMPT,
            COMMIT_USER_PROMPT_TEMPLATE.format(diff=diff),
            self.settings.commit_max_tokens,
        )
        logger.debug(
            "Commit message generated by %s (%d in / %d out tokens)",
            result.model, result.input_tokens, result.output_tokens,
        )
        return parse_commit_message(result.text)

    def generate_pr_content(self, commits: str, diff: str) -> PRContent:
        """Generate a pull request title and description.

        Args:
            commits: One "<short hash> <subject>" line per commit.
            diff: The branch diff.

        Returns:
            The parsed PRContent.
        """
        diff = truncate_diff(diff, self.settings.max_diff_chars)
        result = self.complete(
            PR_SYSTEM_PROMPT,
            PR_USER_PROMPT_TEMPLATE.format(commits=commits, diff=diff),
            self.settings.pr_max_tokens,
        )
        logger.debug(
            "PR content generated by %s (%d in / %d out tokens)",
            result.model, result.input_tokens, result.output_tokens,
        )
        return parse_pr_content(result.text)
