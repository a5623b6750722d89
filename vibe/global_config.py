"""User-level configuration stored in ~/.vibe/.

- config.yaml: provider, model and other Settings fields
- credentials: API keys and the GitHub token in dotenv format, mode 0600
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values, set_key

from vibe.config import LLMProvider


class GlobalConfigError(Exception):
    """Raised when ~/.vibe cannot be read or written."""
    pass


_CONFIG_DIR = Path.home() / ".vibe"

CONFIG_FILE_NAME = "config.yaml"
CREDENTIALS_FILE_NAME = "credentials"
CREDENTIALS_HEADER = "# vibe credentials (KEY_NAME=value)\n"


def get_global_config_dir() -> Path:
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Create ~/.vibe if needed and return it."""
    try:
        _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GlobalConfigError(f"Cannot create {_CONFIG_DIR}: {e}")
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    return get_global_config_dir() / CONFIG_FILE_NAME


def get_credentials_file_path() -> Path:
    return get_global_config_dir() / CREDENTIALS_FILE_NAME


def load_global_config() -> Dict[str, Any]:
    """Read config.yaml.

    Returns:
        The mapping stored in the file, or an empty dict when there is none.

    Raises:
        GlobalConfigError: If the file is unreadable, malformed, or not a mapping.
    """
    path = get_config_file_path()
    if not path.is_file():
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Cannot read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GlobalConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def save_global_config(config: Dict[str, Any]) -> None:
    """Replace config.yaml with the given mapping, keeping key order."""
    path = ensure_global_config_dir() / CONFIG_FILE_NAME
    try:
        path.write_text(yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
    except OSError as e:
        raise GlobalConfigError(f"Cannot write {path}: {e}")


def load_credentials() -> Dict[str, str]:
    """Read every KEY=value pair from the credentials file.

    Keys without a value are dropped.
    """
    path = get_credentials_file_path()
    if not path.is_file():
        return {}

    try:
        values = dotenv_values(path)
    except OSError as e:
        raise GlobalConfigError(f"Cannot read {path}: {e}")
    return {key: value for key, value in values.items() if value is not None}


def save_credential(key_name: str, secret: str) -> None:
    """Add or replace one secret, leaving the others untouched.

    Args:
        key_name: Environment variable name, e.g. "OPENAI_API_KEY".
        secret: The key or token.
    """
    path = ensure_global_config_dir() / CREDENTIALS_FILE_NAME
    try:
        if not path.exists():
            path.write_text(CREDENTIALS_HEADER)
        set_key(path, key_name, secret, quote_mode="never")
        # Owner read/write only
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Cannot write {path}: {e}")


def get_credential(key_name: str) -> Optional[str]:
    return load_credentials().get(key_name)


def set_provider_and_model(provider: LLMProvider, model: str) -> None:
    """Store the active provider and model, keeping other settings."""
    config = load_global_config()
    config.update(provider=provider.value, model=model)
    save_global_config(config)


def is_configured() -> bool:
    return get_config_file_path().is_file()
