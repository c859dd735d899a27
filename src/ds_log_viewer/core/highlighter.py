"""Syntax-colouring tokens for log lines."""

from __future__ import annotations

import re

from ds_log_viewer.core.line_classifier import DEFAULT_MAX_LINE_LENGTH, TRACEBACK_MARKER
from ds_log_viewer.core.log_summary import GAME_INSTANCE_MARKER
from ds_log_viewer.models.annotation import HighlightToken
from ds_log_viewer.models.document import Line, LogDocument

SIM_TIME = "sim-time"
TRACEBACK = "traceback"
TRACEBACK_DEBUG = "traceback-debug"
GAME_INSTANCE = "game-instance"
WORKSHOP_ID = "workshop-id"


class LogHighlighter:
    """Produces token spans the host maps to colours.

    Token types:
    - sim-time: the ``[hh:mm:ss]:`` prefix
    - traceback: the Lua error marker
    - traceback-debug: a whole ``StackTraceToLog`` line
    - game-instance: ``cGame::StartPlaying``
    - workshop-id: ``workshop-<digits>``
    """

    SIM_TIME_PATTERN = re.compile(r"^\[[0-9:]+\]:")
    DEBUG_TRACE_PATTERN = re.compile(r"in \(global\) StackTraceToLog \(Lua\)")
    INLINE_PATTERN = re.compile(
        rf"(?P<traceback>{re.escape(TRACEBACK_MARKER)})"
        rf"|(?P<game_instance>{re.escape(GAME_INSTANCE_MARKER)})"
        r"|(?P<workshop_id>workshop-\d+)"
    )

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> None:
        self._max_line_length = max_line_length

    def highlight(self, document: LogDocument) -> tuple[HighlightToken, ...]:
        """Return the tokens of every line in document order."""
        tokens: list[HighlightToken] = []
        for line in document.lines():
            tokens.extend(self.tokenize_line(line))
        return tuple(tokens)

    def tokenize_line(self, line: Line) -> list[HighlightToken]:
        """Return the tokens of one line, left to right."""
        text = line.text
        if len(text) >= self._max_line_length:
            return []

        if self.DEBUG_TRACE_PATTERN.search(text):
            return [HighlightToken(line.number, 1, len(text) + 1, TRACEBACK_DEBUG)]

        tokens: list[HighlightToken] = []
        offset = 0
        sim_time = self.SIM_TIME_PATTERN.match(text)
        if sim_time:
            tokens.append(HighlightToken(line.number, 1, sim_time.end() + 1, SIM_TIME))
            offset = sim_time.end()

        for match in self.INLINE_PATTERN.finditer(text, offset):
            token_type = (match.lastgroup or "").replace("_", "-")
            tokens.append(
                HighlightToken(line.number, match.start() + 1, match.end() + 1, token_type)
            )
        return tokens
