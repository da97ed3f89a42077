"""Logging setup. The terminal is in raw mode while editing, so records go to a
file or nowhere, never to the console."""

from __future__ import annotations

import logging
import sys

from .config import Config

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(config: Config) -> logging.Logger:
    logger = logging.getLogger("vine")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not config.log_file:
        logger.addHandler(logging.NullHandler())
        return logger

    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    try:
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding="utf-8")
    except OSError as exc:
        print(f"vine: cannot open log file {config.log_file}: {exc}", file=sys.stderr)
        logger.addHandler(logging.NullHandler())
        return logger
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
