"""
Central logging setup.

Usage:
    from retail_core.logging import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the package logger once."""
    root = logging.getLogger("retail_core")
    resolved = getattr(logging, level.upper(), logging.INFO) if level else _get_log_level()
    root.setLevel(resolved)

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "configure_logging", "get_logger"]
