"""Utility helpers."""

from paramspace.utils.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = ["configure_logging", "get_logger", "bind_context", "bound_context", "clear_context"]
