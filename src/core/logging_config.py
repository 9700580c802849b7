"""Structured logging configuration.

This module initializes structlog with a stable JSON format on stderr.
Stdout stays reserved for command results.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, LOG_LEVELS


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog output for the current process.

    Args:
        level: Minimum level name, one of the supported log levels.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[level]),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Bind to the stderr stream current at logger creation time."""
    return structlog.PrintLogger(file=sys.stderr)
