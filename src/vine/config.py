"""Reader for ``~/.vinerc``.

The file is TOML; the classic ``key=value`` lines (``tab_stop=4``) already
are. Unknown keys are ignored and bad values fall back to the defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import toml

from .constants import VINE_QUIT_TIMES, VINE_TAB_STOP
from .syntax import THEMES

logger = logging.getLogger(__name__)

CONFIG_ENV = "VINERC"
CONFIG_NAME = ".vinerc"


@dataclass(slots=True)
class Config:
    tab_stop: int = VINE_TAB_STOP
    quit_times: int = VINE_QUIT_TIMES
    theme: str = "sonokai"
    log_file: str | None = None
    log_level: str = "WARNING"


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_NAME


def _int_setting(data: dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        logger.warning("ignoring %s=%r in config", key, value)
        return default
    return value


def config_from_dict(data: dict[str, Any]) -> Config:
    config = Config()
    config.tab_stop = _int_setting(data, "tab_stop", config.tab_stop, 1)
    config.quit_times = _int_setting(data, "quit_times", config.quit_times, 0)

    theme = data.get("theme", config.theme)
    if isinstance(theme, str) and theme in THEMES:
        config.theme = theme
    else:
        logger.warning("unknown theme %r in config", theme)

    log_file = data.get("log_file")
    if isinstance(log_file, str) and log_file:
        config.log_file = os.path.expanduser(log_file)
    log_level = data.get("log_level")
    if isinstance(log_level, str) and log_level:
        config.log_level = log_level.upper()
    return config


def load_config(path: str | Path | None = None) -> Config:
    path = default_config_path() if path is None else Path(path)
    try:
        data = toml.load(path)
    except FileNotFoundError:
        return Config()
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as exc:
        logger.warning("cannot read config %s: %s", path, exc)
        return Config()
    logger.debug("loaded config from %s", path)
    return config_from_dict(data)
