"""Structured logging for the wayfinding engine.

Log records are JSON lines on stderr. Level comes from `WAYFINDER_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "wayfinder"


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger() -> logging.Logger:
    """Return the package logger, attaching the JSON handler on first use."""
    logger = logging.getLogger(LOGGER_NAME)

    # Reloaders import modules twice.
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(_parse_level(os.getenv("WAYFINDER_LOG_LEVEL", "INFO")))

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    logger._configured = True  # type: ignore[attr-defined]
    return logger


LOGGER = get_logger()


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured event; `event` doubles as the message."""
    LOGGER.log(level, event, extra={"event": event, **fields})
