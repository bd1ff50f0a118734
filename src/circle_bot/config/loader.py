from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")
CONFIG_PATH_ENV = "CIRCLEBOT_CONFIG"
ROOT_TABLE = "circlebot"


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the config file: explicit ``path``, then ``$CIRCLEBOT_CONFIG``, then ./config.toml."""

    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the bot's TOML config.

    Returns an empty dict when the file is missing so callers can fall back to
    environment variables. Settings are read from the ``[circlebot]`` table;
    a file without one is loaded but contributes nothing.
    """
    target = resolve_config_path(path)
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        data = tomllib.load(handle)

    if not isinstance(data.get(ROOT_TABLE), dict):
        logger.warning("%s has no [%s] table; using environment settings", target, ROOT_TABLE)
    return data


__all__ = ["load_raw_config", "resolve_config_path", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
