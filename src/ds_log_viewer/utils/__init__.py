"""Utility functions and helpers.

This module provides various utilities for the viewer engine:
- async_helpers: Exception hierarchy, timeouts
- logging: Structured logging with value truncation
"""

from ds_log_viewer.utils.async_helpers import (
    ClipboardError,
    ConfigError,
    IconResolutionError,
    ResolverTimeoutError,
    SessionNotReadyError,
    ViewerError,
    with_timeout,
)
from ds_log_viewer.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

__all__ = [
    # Errors
    "ClipboardError",
    "ConfigError",
    "IconResolutionError",
    "LogEventNames",
    # Logging
    "LogFormat",
    "LogLevel",
    "ResolverTimeoutError",
    "SessionNotReadyError",
    "ViewerError",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    "with_timeout",
]
