"""Settings management for bgrun - handles persistent user defaults."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from bgrun.exceptions import ConfigError

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}


def get_config_dir() -> Path:
    """Get the bgrun configuration directory (~/.bgrun or $BGRUN_HOME)."""
    override = os.environ.get("BGRUN_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".bgrun"


def get_settings_file() -> Path:
    """Get the path to the settings file."""
    return get_config_dir() / "settings.json"


def load_settings() -> dict[str, Any]:
    """Load settings from settings.json.

    Returns:
        Dictionary of settings, empty dict if file doesn't exist

    Raises:
        ConfigError: If the file exists but cannot be read or is not a JSON object
    """
    settings_file = get_settings_file()
    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, encoding="utf-8") as f:
            data: Any = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not load settings file {settings_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {settings_file} must contain a JSON object")
    logger.debug(f"Loaded settings from {settings_file}")
    return data  # type: ignore


def save_settings(settings: dict[str, Any]) -> None:
    """Save settings to settings.json.

    Args:
        settings: Dictionary of settings to save
    """
    settings_file = get_settings_file()
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
    except OSError as e:
        raise ConfigError(f"Could not save settings file {settings_file}: {e}") from e
    logger.debug(f"Saved settings to {settings_file}")


def set_setting(key: str, value: Any) -> None:
    """Set a specific setting.

    Args:
        key: The setting key
        value: The value to set (must be JSON serializable)
    """
    settings = load_settings()
    settings[key] = value
    save_settings(settings)


def parse_bool(value: str) -> bool | None:
    """Parse an environment-style boolean, None if unrecognized."""
    lowered = value.strip().lower()
    if lowered in TRUTHY:
        return True
    if lowered in FALSY:
        return False
    return None


def get_bool_setting(key: str, settings: dict[str, Any] | None = None) -> bool:
    """Resolve a boolean default for a command-line switch.

    Priority:
    1. Environment variable BGRUN_<KEY>
    2. Settings file
    3. False

    Args:
        key: The setting key (e.g. "debug")
        settings: Already loaded settings (loaded from disk if omitted)

    Returns:
        The resolved value
    """
    env_name = f"BGRUN_{key.upper()}"
    env_value = os.environ.get(env_name)
    if env_value is not None:
        parsed = parse_bool(env_value)
        if parsed is not None:
            return parsed
        logger.warning(f"Ignoring {env_name}={env_value!r}: not a boolean")

    if settings is None:
        settings = load_settings()
    value = settings.get(key, False)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return parse_bool(value) or False
    logger.warning(f"Ignoring setting {key!r}={value!r}: not a boolean")
    return False
