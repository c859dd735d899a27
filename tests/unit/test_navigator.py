"""Tests for Navigator functionality."""

import pytest

from ds_log_viewer.config.schema import NavigationConfig
from ds_log_viewer.core.document_view import DocumentView
from ds_log_viewer.core.navigator import Direction, NavigateAction, Navigator
from ds_log_viewer.models.document import LogDocument, Position

ERROR_MARKER = "LUA ERROR stack traceback:"


class WrappingSearch:
    """Search provider that wraps around like many editor widgets."""

    def __init__(self, document: LogDocument) -> None:
        self._document = document

    @property
    def line_count(self) -> int:
        return self._document.line_count

    def line_text(self, number: int) -> str:
        return self._document.line_text(number)

    def find_next(self, needle: str, after: Position) -> Position | None:
        return self._document.find_next(needle, after) or self._document.find_next(
            needle, Position(1, 0)
        )

    def find_previous(self, needle: str, before: Position) -> Position | None:
        last = Position(self.line_count, len(self.line_text(self.line_count)) + 1)
        return self._document.find_previous(needle, before) or self._document.find_previous(
            needle, last
        )


@pytest.fixture
def navigator(client_view: DocumentView) -> Navigator:
    """Create a Navigator over the client log view."""
    return Navigator(client_view)


class TestNavigate:
    """Tests for computing navigation targets."""

    def test_next_error_from_top(self, navigator: Navigator) -> None:
        """Test finding the first error marker."""
        target = navigator.navigate(Position(1, 1), ERROR_MARKER, Direction.FORWARD)

        assert target == Position(13, 1)

    def test_next_does_not_rematch_current(self, navigator: Navigator) -> None:
        """Test that a cursor on a marker moves to the following one."""
        target = navigator.navigate(Position(13, 1), ERROR_MARKER, Direction.FORWARD)

        assert target == Position(22, 1)

    def test_previous_error(self, navigator: Navigator) -> None:
        """Test finding the marker before the cursor."""
        target = navigator.navigate(Position(22, 1), ERROR_MARKER, Direction.BACKWARD)

        assert target == Position(13, 1)

    def test_previous_on_same_line(self, navigator: Navigator) -> None:
        """Test that a marker starting left of the cursor is found."""
        target = navigator.navigate(Position(13, 5), ERROR_MARKER, Direction.BACKWARD)

        assert target == Position(13, 1)

    def test_no_wrap_forward(self, navigator: Navigator) -> None:
        """Test that searching past the last marker finds nothing."""
        assert navigator.navigate(Position(22, 1), ERROR_MARKER, Direction.FORWARD) is None

    def test_no_wrap_backward(self, navigator: Navigator) -> None:
        """Test that searching before the first marker finds nothing."""
        assert navigator.navigate(Position(13, 1), ERROR_MARKER, Direction.BACKWARD) is None

    def test_missing_marker(self, navigator: Navigator) -> None:
        """Test a marker that never occurs."""
        assert navigator.navigate(Position(1, 1), "nothing here", Direction.FORWARD) is None

    def test_wrapping_host_is_ignored(self, client_log: LogDocument) -> None:
        """Test that wrapped-around results from a host search are discarded."""
        navigator = Navigator(WrappingSearch(client_log))

        assert navigator.navigate(Position(22, 1), ERROR_MARKER, Direction.FORWARD) is None
        assert navigator.navigate(Position(13, 1), ERROR_MARKER, Direction.BACKWARD) is None
        assert navigator.navigate(Position(1, 1), ERROR_MARKER, Direction.FORWARD) == Position(
            13, 1
        )


class TestPerform:
    """Tests for navigation commands against a view."""

    def test_repeated_next_error(self, navigator: Navigator, client_view: DocumentView) -> None:
        """Test stepping through every error then stopping at the last."""
        assert navigator.perform(NavigateAction.NEXT_ERROR, client_view) == Position(13, 1)
        assert navigator.perform(NavigateAction.NEXT_ERROR, client_view) == Position(22, 1)
        assert navigator.perform(NavigateAction.NEXT_ERROR, client_view) is None
        assert client_view.get_cursor() == Position(22, 1)

    def test_instances(self, navigator: Navigator, client_view: DocumentView) -> None:
        """Test jumping between game instances."""
        assert navigator.perform(NavigateAction.NEXT_INSTANCE, client_view) == Position(11, 13)
        assert navigator.perform(NavigateAction.NEXT_INSTANCE, client_view) == Position(20, 13)
        assert navigator.perform(NavigateAction.PREV_INSTANCE, client_view) == Position(11, 13)
        assert navigator.perform(NavigateAction.PREV_INSTANCE, client_view) is None

    def test_prev_error_from_end(self, navigator: Navigator, client_view: DocumentView) -> None:
        """Test stepping backwards from the end of the log."""
        client_view.set_cursor(Position(23, 1))

        assert navigator.perform(NavigateAction.PREV_ERROR, client_view) == Position(22, 1)
        assert navigator.perform(NavigateAction.PREV_ERROR, client_view) == Position(13, 1)

    def test_custom_markers(self, client_view: DocumentView) -> None:
        """Test that configured markers are used."""
        navigator = Navigator(
            client_view, NavigationConfig(error_marker="Loading mod:", instance_marker="Mode:")
        )

        assert navigator.perform(NavigateAction.NEXT_ERROR, client_view) == Position(9, 13)
        assert navigator.marker_for(NavigateAction.PREV_INSTANCE) == "Mode:"


class TestNavigateAction:
    """Tests for NavigateAction."""

    def test_directions(self) -> None:
        """Test the direction of each command."""
        assert NavigateAction.NEXT_ERROR.direction is Direction.FORWARD
        assert NavigateAction.NEXT_INSTANCE.direction is Direction.FORWARD
        assert NavigateAction.PREV_ERROR.direction is Direction.BACKWARD
        assert NavigateAction.PREV_INSTANCE.direction is Direction.BACKWARD
