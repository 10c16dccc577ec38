"""
Configuration model and loading.

Layered precedence: defaults < user config < .env files < env vars.
"""

from .env import load_layered_env
from .loader import (
    clear_cache,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import HubConfig

__all__ = [
    "HubConfig",
    "clear_cache",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
