# turbonav/logging_config.py
from __future__ import annotations

import logging
import os
from logging import Logger
from logging.config import dictConfig
from typing import Any

LOG_LEVEL_ENV = "TURBONAV_LOG_LEVEL"


def _default_logging_dict(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s - %(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def resolve_level(level_name: str | int | None = None) -> int:
    """Turn a level name (or number) into a logging level.

    The ``TURBONAV_LOG_LEVEL`` environment variable wins over ``level_name``.
    Unknown names fall back to INFO.
    """
    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        level_name = env_level
    if level_name is None:
        return logging.INFO
    if isinstance(level_name, int):
        return level_name
    level = getattr(logging, level_name.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str | int | None = None) -> None:
    level = resolve_level(level_name)
    dictConfig(_default_logging_dict(logging.getLevelName(level)))
    logging.getLogger().setLevel(level)


def get_logger(name: str) -> Logger:
    """Return a module logger: ``logger = get_logger(__name__)``."""
    return logging.getLogger(name)
