"""Configuration for vibe.

Settings are resolved once per invocation by load_settings() and passed to
the components that need them. Sources, lowest precedence first:
- defaults below
- ~/.vibe/config.yaml (see vibe.global_config)
- VIBE_PROVIDER / VIBE_MODEL environment variables
"""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_COMMIT_MAX_TOKENS = 200
DEFAULT_PR_MAX_TOKENS = 500

# Diffs longer than this are cut before they are sent to the model
DEFAULT_MAX_DIFF_CHARS = 10000

# Applies to model and GitHub API calls only
DEFAULT_REQUEST_TIMEOUT = 30.0

DEFAULT_GITHUB_API_URL = "https://api.github.com"


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4-turbo",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
}

# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}

GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


class Settings(BaseModel):
    """Resolved settings for one invocation."""

    provider: LLMProvider = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    commit_max_tokens: int = Field(default=DEFAULT_COMMIT_MAX_TOKENS, gt=0)
    pr_max_tokens: int = Field(default=DEFAULT_PR_MAX_TOKENS, gt=0)
    max_diff_chars: int = Field(default=DEFAULT_MAX_DIFF_CHARS, gt=0)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    github_api_url: str = DEFAULT_GITHUB_API_URL
    editor: Optional[str] = None

    @property
    def api_key_env_var(self) -> str:
        return get_api_key_env_var(self.provider)


def load_settings(overrides: Optional[dict] = None) -> Settings:
    """Build the settings for this invocation.

    Args:
        overrides: Values that win over every other source (e.g. CLI options).

    Returns:
        A validated Settings instance.

    Raises:
        GlobalConfigError: If ~/.vibe/config.yaml cannot be read.
        ValueError: If a configured value is invalid (pydantic's
            ValidationError is a ValueError).
    """
    # Import here to avoid circular dependency
    from vibe import global_config

    values = {
        key: value
        for key, value in global_config.load_global_config().items()
        if key in Settings.model_fields and value is not None
    }

    env_provider = os.environ.get("VIBE_PROVIDER")
    if env_provider:
        values["provider"] = env_provider
    env_model = os.environ.get("VIBE_MODEL")
    if env_model:
        values["model"] = env_model

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    # A provider without a model gets that provider's first model
    if "provider" in values and "model" not in values:
        values["model"] = AVAILABLE_MODELS[LLMProvider(values["provider"])][0]

    return Settings(**values)
