"""Jump-to-marker navigation over the host view."""

from __future__ import annotations

from enum import Enum

import structlog

from ds_log_viewer.config.schema import NavigationConfig
from ds_log_viewer.interfaces.view import SearchProvider, TextView
from ds_log_viewer.models.document import Position
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()


class Direction(Enum):
    """Search direction relative to the cursor."""

    FORWARD = "forward"
    BACKWARD = "backward"


class NavigateAction(Enum):
    """Side panel / keyboard navigation commands."""

    NEXT_ERROR = "next-error"
    PREV_ERROR = "prev-error"
    NEXT_INSTANCE = "next-instance"
    PREV_INSTANCE = "prev-instance"

    @property
    def direction(self) -> Direction:
        if self in (NavigateAction.NEXT_ERROR, NavigateAction.NEXT_INSTANCE):
            return Direction.FORWARD
        return Direction.BACKWARD


class Navigator:
    """Finds the next or previous occurrence of a fixed marker.

    ``navigate`` only computes a target; ``perform`` is the one method that
    moves the host cursor. Neither wraps around the document ends, so
    repeating a command past the last marker keeps returning None.

    Example:
        navigator = Navigator(view)
        navigator.perform(NavigateAction.NEXT_ERROR, view)
    """

    def __init__(
        self,
        search: SearchProvider,
        config: NavigationConfig | None = None,
    ) -> None:
        self._search = search
        self._config = config or NavigationConfig()

    def marker_for(self, action: NavigateAction) -> str:
        if action in (NavigateAction.NEXT_ERROR, NavigateAction.PREV_ERROR):
            return self._config.error_marker
        return self._config.instance_marker

    def navigate(
        self,
        position: Position,
        marker: str,
        direction: Direction,
    ) -> Position | None:
        """Find the nearest occurrence of ``marker`` in a direction.

        Args:
            position: Current cursor position
            marker: Exact, case-sensitive text to find
            direction: FORWARD for strictly after, BACKWARD for strictly before

        Returns:
            Start position of the occurrence, or None if there is none
        """
        if direction is Direction.FORWARD:
            match = self._search.find_next(marker, position)
            # Guard against hosts whose search primitive wraps around
            if match is not None and match <= position:
                match = None
        else:
            match = self._search.find_previous(marker, position)
            if match is not None and match >= position:
                match = None

        if match is None:
            log.debug(
                LogEventNames.NAVIGATION_NO_TARGET,
                marker=marker,
                direction=direction.value,
                line=position.line,
            )
            return None

        target = self._clamp(match)
        log.debug(
            LogEventNames.NAVIGATION_TARGET,
            marker=marker,
            direction=direction.value,
            line=target.line,
            column=target.column,
        )
        return target

    def perform(self, action: NavigateAction, view: TextView) -> Position | None:
        """Run a navigation command and move the view's cursor.

        Returns:
            The new cursor position, or None if the cursor did not move
        """
        target = self.navigate(view.get_cursor(), self.marker_for(action), action.direction)
        if target is not None:
            view.set_cursor(target)
        return target

    def _clamp(self, position: Position) -> Position:
        line_count = self._search.line_count
        line = min(max(position.line, 1), line_count)
        max_column = len(self._search.line_text(line)) + 1
        return Position(line, min(max(position.column, 1), max_column))
