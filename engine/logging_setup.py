"""Logging setup for the visualizer server."""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level_name: Optional[str]) -> int:
    """Map a level name to its number; unknown names mean INFO."""
    level = logging.getLevelName((level_name or "INFO").upper())
    if not isinstance(level, int):
        return logging.INFO
    return level


def init_logging(level_name: Optional[str] = None, app_name: str = "stepwise") -> int:
    """Initialize root logging once and return the effective level."""
    if level_name is None:
        level_name = os.getenv("STEPWISE_LOG_LEVEL", "INFO")
    level = resolve_level(level_name)

    root = logging.getLogger()
    root.setLevel(level)

    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setLevel(level)

    logging.getLogger(app_name).info("Logging initialized at %s", logging.getLevelName(level))
    return level
