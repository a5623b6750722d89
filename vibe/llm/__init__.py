"""LLM provider module for vibe.

This module provides a unified interface to the supported LLM providers.
The active provider comes from the Settings passed to get_provider().
"""

from typing import Optional

from vibe.config import LLMProvider, Settings
from vibe.llm.base import BaseLLMProvider, LLMResult, truncate_diff
from vibe.llm.exceptions import LLMError, MissingAPIKeyError
from vibe.llm.parsing import PRContent, parse_commit_message, parse_pr_content


def get_provider(settings: Settings, api_key: Optional[str] = None) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        settings: Resolved settings; settings.provider selects the backend.
        api_key: Explicit API key, looked up lazily if omitted.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    if settings.provider == LLMProvider.OPENAI:
        from vibe.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(settings, api_key=api_key)

    elif settings.provider == LLMProvider.ANTHROPIC:
        from vibe.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(settings, api_key=api_key)

    else:
        raise ValueError(f"Unsupported provider: {settings.provider}")


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "LLMResult",
    "PRContent",
    "get_provider",
    "parse_commit_message",
    "parse_pr_content",
    "truncate_diff",
]
