"""Structured logging configuration.

This module provides logging configuration for the viewer engine:
- Configurable log levels and output formats (JSON/console)
- Truncation of oversized values (log lines can be megabytes long)
- Context injection for correlation
- File and console output support
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.typing import WrappedLogger

# Longest string value emitted in a single log field
MAX_LOG_VALUE_LENGTH = 500


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def truncate_log_value(value: Any, limit: int = MAX_LOG_VALUE_LENGTH) -> Any:
    """Recursively shorten long strings in log values.

    Args:
        value: Value to truncate (can be nested dict/list/str)
        limit: Maximum number of characters kept per string

    Returns:
        Value with every string longer than ``limit`` cut and marked
    """
    if isinstance(value, str):
        if len(value) <= limit:
            return value
        return f"{value[:limit]}... [{len(value) - limit} chars truncated]"
    elif isinstance(value, dict):
        return {k: truncate_log_value(v, limit) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return type(value)(truncate_log_value(v, limit) for v in value)
    else:
        return value


def value_truncator(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor that bounds the size of every log entry.

    Args:
        logger: Logger instance (unused)
        method_name: Log method name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with long strings truncated
    """
    result = truncate_log_value(event_dict)
    return cast(MutableMapping[str, Any], result)


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add contextual information to all log entries.

    Adds standard fields for correlation and debugging:
    - service: Always "ds-log-viewer"
    - version: Current application version (if available)

    Args:
        logger: Logger instance (unused)
        method_name: Log method name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with added context
    """
    event_dict["service"] = "ds-log-viewer"

    try:
        from ds_log_viewer._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.CONSOLE,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging

    Example:
        configure_logging(level="DEBUG", log_format="console")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        value_truncator,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if file_enabled and file_path:
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(file_path)
            file_handler.setLevel(numeric_level)
            handlers.append(file_handler)
        except OSError as e:
            # Continue with console only
            console_logger = logging.getLogger("ds_log_viewer.logging")
            console_logger.warning(f"Could not create log file {file_path}: {e}")

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str | None = None) -> WrappedLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Configured structlog logger
    """
    return cast(WrappedLogger, structlog.get_logger(name))


def bind_context(**kwargs: Any) -> None:
    """Bind contextual variables for all subsequent log calls.

    Example:
        bind_context(log_file="server_log.txt")
        log.info("document_loaded")  # Includes log_file
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove contextual variables."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound contextual variables."""
    structlog.contextvars.clear_contextvars()


class LogEventNames:
    """Standard log event names for consistency."""

    # Document lifecycle
    DOCUMENT_LOADED = "document_loaded"
    DOCUMENT_RELOADED = "document_reloaded"

    # Scanning
    SCAN_COMPLETE = "scan_complete"
    LINE_CLASSIFICATION_FAILED = "line_classification_failed"
    SUMMARY_COMPLETE = "summary_complete"

    # Overlays
    OVERLAYS_PUSHED = "overlays_pushed"
    BLOCK_COPIED = "block_copied"
    BLOCK_COPY_FAILED = "block_copy_failed"

    # Icon cache
    ICON_FETCH_STARTED = "icon_fetch_started"
    ICON_RESOLVED = "icon_resolved"
    ICON_FETCH_FAILED = "icon_fetch_failed"
    ICON_ABANDONED = "icon_abandoned"
    ICON_COMPLETION_DISCARDED = "icon_completion_discarded"
    ICON_SUBSCRIBER_FAILED = "icon_subscriber_failed"

    # Navigation
    NAVIGATION_TARGET = "navigation_target"
    NAVIGATION_NO_TARGET = "navigation_no_target"
