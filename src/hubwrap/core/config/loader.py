"""
Configuration loading with layered precedence.

Implements the configuration precedence chain:
    defaults < user config file < environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import HubConfig

logger = logging.getLogger(__name__)

# Maps environment variables onto config keys
ENV_OVERRIDES = {
    "GITHUB_HOST": "host",
    "GITHUB_USER": "user",
    "GITHUB_TOKEN": "token",
    "HUB_PROTOCOL": "protocol",
    "BROWSER": "browser",
}

_config_cache: HubConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/hubwrap/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "hubwrap" / "config.json"


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        GITHUB_HOST, GITHUB_USER, GITHUB_TOKEN - service host and credentials
        HUB_PROTOCOL - "git" or "https"
        BROWSER - web launcher for browse/compare
        HUB_DEBUG - enables debug logging

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    for env_name, key in ENV_OVERRIDES.items():
        if env_name in os.environ:
            result[key] = os.environ[env_name]

    if protocol := result.get("protocol"):
        protocol = str(protocol).lower()
        if protocol not in ("git", "https"):
            logger.warning("Invalid protocol '%s', ignoring", protocol)
            result.pop("protocol")
        else:
            result["protocol"] = protocol

    if (debug_str := os.environ.get("HUB_DEBUG")) is not None:
        result["debug"] = debug_str.lower() not in ("false", "0", "")

    return result


def load_config(use_cache: bool = True) -> HubConfig:
    """
    Load configuration with layered merging.

    Args:
        use_cache: If True, return cached config from previous load

    Returns:
        Validated HubConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}
    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    merged = apply_env_overrides(merged)
    config = HubConfig(**merged)

    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when the environment changes during execution.
    """
    global _config_cache
    _config_cache = None
