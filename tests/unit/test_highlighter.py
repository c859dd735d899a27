"""Tests for LogHighlighter functionality."""

import pytest

from ds_log_viewer.core.highlighter import LogHighlighter
from ds_log_viewer.models.annotation import HighlightToken
from ds_log_viewer.models.document import Line, LogDocument


@pytest.fixture
def highlighter() -> LogHighlighter:
    """Create a LogHighlighter instance."""
    return LogHighlighter()


class TestTokenizeLine:
    """Tests for tokenizing single lines."""

    def test_sim_time_and_instance(self, highlighter: LogHighlighter) -> None:
        """Test the timestamp prefix and the game instance marker."""
        tokens = highlighter.tokenize_line(Line(11, "[00:00:05]: cGame::StartPlaying"))

        assert tokens == [
            HighlightToken(11, 1, 12, "sim-time"),
            HighlightToken(11, 13, 32, "game-instance"),
        ]

    def test_traceback_marker(self, highlighter: LogHighlighter) -> None:
        """Test the Lua error marker."""
        tokens = highlighter.tokenize_line(Line(3, "LUA ERROR stack traceback:"))

        assert tokens == [HighlightToken(3, 1, 27, "traceback")]

    def test_workshop_ids(self, highlighter: LogHighlighter) -> None:
        """Test every workshop reference in a line."""
        tokens = highlighter.tokenize_line(Line(1, "workshop-11111 workshop-22222"))

        assert [(t.start_column, t.end_column, t.token_type) for t in tokens] == [
            (1, 15, "workshop-id"),
            (16, 30, "workshop-id"),
        ]

    def test_debug_trace_line(self, highlighter: LogHighlighter) -> None:
        """Test that StackTraceToLog lines are coloured whole."""
        text = "scripts/debugtools.lua:45 in (global) StackTraceToLog (Lua) <40-50>"

        tokens = highlighter.tokenize_line(Line(5, text))

        assert tokens == [HighlightToken(5, 1, len(text) + 1, "traceback-debug")]

    def test_plain_line(self, highlighter: LogHighlighter) -> None:
        """Test a line with nothing to colour."""
        assert highlighter.tokenize_line(Line(1, "nothing to see")) == []

    def test_oversized_line(self) -> None:
        """Test that lines over the ceiling get no tokens."""
        highlighter = LogHighlighter(max_line_length=10)

        assert highlighter.tokenize_line(Line(1, "[00:00:01]: workshop-12345")) == []


class TestHighlight:
    """Tests for highlighting whole documents."""

    def test_tokens_in_document_order(
        self, highlighter: LogHighlighter, client_log: LogDocument
    ) -> None:
        """Test that tokens come out ordered by line."""
        tokens = highlighter.highlight(client_log)

        lines = [token.line for token in tokens]
        assert lines == sorted(lines)
        assert {token.token_type for token in tokens} == {
            "sim-time",
            "game-instance",
            "traceback",
            "workshop-id",
        }
