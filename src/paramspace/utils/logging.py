"""Structured logging configuration using structlog."""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    bound_contextvars,
    clear_contextvars,
    merge_contextvars,
)

from paramspace.config import get_settings


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    add_timestamps: bool = True,
) -> None:
    """Configure structured logging for applications using the library.

    The library itself never calls this; it only emits through ``get_logger``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings.
        json_format: Output logs as JSON (True) or human-readable (False).
            Defaults to settings.
        add_timestamps: Include timestamps in log output.
    """
    settings = get_settings()
    level = settings.log_level if level is None else level
    json_format = settings.log_json if json_format is None else json_format
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    shared_processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamps:
        shared_processors.insert(
            1,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        )

    if json_format:
        renderer: Any = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables (e.g. a study name) to subsequent log lines."""
    bind_contextvars(**kwargs)


def bound_context(**kwargs: Any) -> AbstractContextManager[None]:
    """Bind context variables for a block, restoring the previous values on exit."""
    return bound_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    clear_contextvars()
