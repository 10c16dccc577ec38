"""
.env support for hub's environment settings.

GITHUB_HOST, GITHUB_USER, GITHUB_TOKEN, HUB_PROTOCOL and HUB_DEBUG are read
from the process environment. They can also be kept in dotenv files so a
token does not have to be exported in every shell:

    ~/.config/hubwrap/.env        per-user defaults
    ./.env, ./.env.local          per-checkout settings (e.g. an enterprise host)

A variable exported in the shell always wins; a checkout file wins over the
user file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import clear_cache, get_xdg_config_home

logger = logging.getLogger(__name__)

PROJECT_ENV_FILES = (".env", ".env.local")


def get_user_env_path() -> Path:
    return get_xdg_config_home() / "hubwrap" / ".env"


def read_env_files(paths: Iterable[Path]) -> dict[str, str]:
    """
    Merge dotenv files; later files override earlier ones.

    Missing files are skipped, and so are keys without a value.
    """
    merged: dict[str, str] = {}
    for path in paths:
        path = Path(path)
        if not path.is_file():
            continue
        values = {k: v for k, v in dotenv_values(path).items() if k and v is not None}
        logger.debug("read %d setting(s) from %s", len(values), path)
        merged.update(values)
    return merged


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> list[str]:
    """
    Export settings from the user and checkout .env files.

    Args:
        project_dir: Checkout directory (defaults to cwd)
        user_env_paths: User files (defaults to ~/.config/hubwrap/.env)
        project_env_paths: Checkout files (defaults to .env and .env.local)

    Returns:
        Names of the variables that were exported
    """
    project_dir = project_dir or Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_user_env_path()]
    if project_env_paths is None:
        project_env_paths = [project_dir / name for name in PROJECT_ENV_FILES]

    settings = read_env_files([*user_env_paths, *project_env_paths])
    exported = [name for name in settings if name not in os.environ]
    for name in exported:
        os.environ[name] = settings[name]

    if exported:
        # a config loaded before this point would miss the new values
        clear_cache()
    return exported
