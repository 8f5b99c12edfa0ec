"""Logging configuration shared by uvicorn and the skillpack loggers."""

from __future__ import annotations

import logging.config
from typing import Any

from skillpack.configs import configs

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def build_logging_config(level: str = "INFO") -> dict[str, Any]:
    """Return a ``dictConfig`` mapping usable as uvicorn's ``log_config``."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": _FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(asctime)s | %(levelname)-8s | %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "skillpack": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
    }


LOGGING_CONFIG = build_logging_config("DEBUG" if configs.Debug else configs.LogLevel)


def setup_logging(level: str | None = None) -> None:
    """Apply the logging config outside of uvicorn (scripts, tests)."""
    logging.config.dictConfig(build_logging_config(level) if level else LOGGING_CONFIG)
