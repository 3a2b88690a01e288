"""Structured logging configuration.

This module initializes structlog with a stable JSON format on stderr.
Standard output is reserved for account reports.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_configured_level: str | None = None


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if _configured_level is None:
        configure_logging(DEFAULT_LOG_LEVEL)
    return structlog.get_logger(name)


def configure_logging(level: str) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level name, e.g. ``warning``.
    """
    global _configured_level
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
    _configured_level = level


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Build a print logger bound to the current stderr stream."""
    return structlog.PrintLogger(sys.stderr)


def _level_number(level: str) -> int:
    """Map a level name onto stdlib logging numbers."""
    return int(getattr(logging, level.upper(), logging.WARNING))
