"""Async utility functions and the engine's exception hierarchy.

This module provides:
- Custom exceptions for error handling
- Timeout wrappers for async operations

None of the annotation code raises for malformed log content; these
exceptions cover host-facing failures (icon resolution, clipboard, session
ordering, configuration).
"""

from __future__ import annotations

import asyncio
import builtins
from collections.abc import Awaitable
from typing import TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")


# =============================================================================
# Custom Exceptions
# =============================================================================


class ViewerError(Exception):
    """Base exception for all viewer engine errors."""


class IconResolutionError(ViewerError):
    """The external resolver failed to produce an icon URL.

    Attributes:
        reference_id: The workshop id being resolved, if known.
    """

    def __init__(self, message: str, reference_id: str | None = None) -> None:
        super().__init__(message)
        self.reference_id = reference_id


class ResolverTimeoutError(IconResolutionError):
    """Icon resolution did not finish within the configured timeout."""


class ClipboardError(ViewerError):
    """Writing to the host clipboard failed."""


class SessionNotReadyError(ViewerError):
    """A hover or navigate call arrived before the document was scanned."""


class ConfigError(ViewerError):
    """Configuration could not be loaded or is inconsistent."""


# =============================================================================
# Timeout Utilities
# =============================================================================


async def with_timeout(
    coro: Awaitable[T],
    timeout: float,
    error_message: str | None = None,
) -> T:
    """Execute an awaitable with a timeout.

    Args:
        coro: The coroutine to execute.
        timeout: Timeout in seconds.
        error_message: Custom error message for timeout.

    Returns:
        The result of the coroutine.

    Raises:
        ResolverTimeoutError: If the operation times out.
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except builtins.TimeoutError as e:
        msg = error_message or f"Operation timed out after {timeout}s"
        log.warning("operation_timeout", timeout=timeout)
        raise ResolverTimeoutError(msg) from e
