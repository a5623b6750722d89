"""Tests for vibe.config module."""

import os
from unittest.mock import patch

import pytest
import yaml

from vibe.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    DEFAULT_MAX_DIFF_CHARS,
    DEFAULT_MODEL,
    LLMProvider,
    Settings,
    get_api_key_env_var,
    load_settings,
)


def _write_config(config_dir, config):
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.yaml").write_text(yaml.dump(config))


class TestProviderTables:
    """Tests for the provider lookup tables."""

    def test_every_provider_has_models_and_key(self):
        """Test that each provider has a model list and an API key variable."""
        for provider in LLMProvider:
            assert AVAILABLE_MODELS[provider]
            assert provider in API_KEY_ENV_VARS

    def test_get_api_key_env_var(self):
        """Test the API key variable names."""
        assert get_api_key_env_var(LLMProvider.OPENAI) == "OPENAI_API_KEY"
        assert get_api_key_env_var(LLMProvider.ANTHROPIC) == "ANTHROPIC_API_KEY"


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self):
        """Test the default values."""
        settings = Settings()
        assert settings.provider is LLMProvider.OPENAI
        assert settings.model == DEFAULT_MODEL == "gpt-4o"
        assert settings.max_diff_chars == DEFAULT_MAX_DIFF_CHARS == 10000
        assert settings.api_key_env_var == "OPENAI_API_KEY"

    def test_provider_from_string(self):
        """Test that the provider is validated from its string value."""
        assert Settings(provider="anthropic").provider is LLMProvider.ANTHROPIC

    def test_rejects_invalid_values(self):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            Settings(max_diff_chars=0)
        with pytest.raises(ValueError):
            Settings(provider="nope")


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults_without_config(self):
        """Test that missing config yields defaults."""
        with patch.dict(os.environ, {}, clear=True):
            assert load_settings() == Settings()

    def test_reads_global_config(self, isolated_config_dir):
        """Test that values in config.yaml are used and unknown keys ignored."""
        _write_config(isolated_config_dir, {
            "provider": "anthropic",
            "model": "claude-3-5-haiku-latest",
            "max_diff_chars": 5000,
            "editor": "vim",
            "unrelated": True,
        })

        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()

        assert settings.provider is LLMProvider.ANTHROPIC
        assert settings.model == "claude-3-5-haiku-latest"
        assert settings.max_diff_chars == 5000
        assert settings.editor == "vim"

    def test_environment_overrides_config(self, isolated_config_dir):
        """Test that VIBE_PROVIDER and VIBE_MODEL win over config.yaml."""
        _write_config(isolated_config_dir, {"provider": "openai", "model": "gpt-4o-mini"})

        env = {"VIBE_PROVIDER": "anthropic", "VIBE_MODEL": "claude-3-5-sonnet-latest"}
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()

        assert settings.provider is LLMProvider.ANTHROPIC
        assert settings.model == "claude-3-5-sonnet-latest"

    def test_provider_without_model_gets_provider_default(self):
        """Test that choosing only a provider picks its first model."""
        with patch.dict(os.environ, {"VIBE_PROVIDER": "anthropic"}, clear=True):
            settings = load_settings()

        assert settings.model == AVAILABLE_MODELS[LLMProvider.ANTHROPIC][0]

    def test_overrides_win(self):
        """Test that explicit overrides beat every other source."""
        with patch.dict(os.environ, {"VIBE_MODEL": "gpt-4.1"}, clear=True):
            settings = load_settings({"model": "gpt-4o-mini", "temperature": None})

        assert settings.model == "gpt-4o-mini"
        assert settings.temperature == Settings().temperature

    def test_invalid_config_value(self, isolated_config_dir):
        """Test that an invalid configured value raises ValueError."""
        _write_config(isolated_config_dir, {"temperature": 9})

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError):
                load_settings()
