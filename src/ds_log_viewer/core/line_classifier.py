"""Per-line classification of Lua traceback content.

This module implements the LineClassifier class that decides, one line at a
time, whether a line:
- Opens a traceback block (``LUA ERROR stack traceback:``)
- Closes the open block (next ``[hh:mm:ss]:`` timestamped line)
- Is a stack frame in engine code (``scripts/...``, ``=[C]``, tail calls)
- Is a stack frame in add-on code (``../mods/<dir>/...``)

The only carried context is a ScanState, so the classifier is a two-state
machine that can be driven by any scanner.
"""

from __future__ import annotations

import re

from ds_log_viewer.models.document import Line
from ds_log_viewer.models.traceback import (
    AttributedFrame,
    Classification,
    FrameOrigin,
    ScanState,
    TracebackBlock,
)

TRACEBACK_MARKER = "LUA ERROR stack traceback:"
DEFAULT_MAX_LINE_LENGTH = 2000


class LineClassifier:
    """Classifies log lines against the traceback state machine.

    Responsibilities:
    - Detect the start and end of traceback blocks
    - Attribute frame lines inside a block to engine or add-on code
    - Skip oversized lines without pattern matching them

    Example:
        classifier = LineClassifier()
        state = ScanState.outside()
        for line in document.lines():
            result, state = classifier.classify(line, state)
    """

    TIMESTAMP_PREFIX = re.compile(r"^\[\d+:\d+:\d+\]:")
    ENGINE_FRAME_PATTERN = re.compile(r"^scripts/[^:.]+\.lua(:\d+ in \(|\(\d+,1\))")
    NATIVE_FRAME_PATTERN = re.compile(r"^=\[C\] in function ")
    TAIL_CALL_PATTERN = re.compile(r"^=\(tail call\)?")
    ADDON_FRAME_PATTERN = re.compile(r"^\.\./mods/([^/]+)/")

    def __init__(
        self,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        marker: str = TRACEBACK_MARKER,
    ) -> None:
        """Initialize the LineClassifier.

        Args:
            max_line_length: Lines at or over this length are skipped
            marker: Text a line starts with to open a traceback block
        """
        self._max_line_length = max_line_length
        self._marker = marker

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    def classify(self, line: Line, state: ScanState) -> tuple[Classification, ScanState]:
        """Classify one line and compute the state for the next line.

        Args:
            line: The line to classify
            state: State carried over from the previous line

        Returns:
            Tuple of (classification, next state)
        """
        if len(line.text) >= self._max_line_length:
            return Classification(line.number, skipped=True), state

        closed_block: TracebackBlock | None = None
        if state.in_traceback:
            if self.TIMESTAMP_PREFIX.match(line.text):
                closed_block = TracebackBlock(_block_start(state), line.number - 1)
                state = ScanState.outside()
            else:
                frame = self.attribute_frame(line)
                return Classification(line.number, frame=frame), state

        # Either outside from the start, or the line that just closed a block
        if line.text.startswith(self._marker):
            return (
                Classification(line.number, opens_block=True, closed_block=closed_block),
                ScanState.inside(line.number),
            )

        return Classification(line.number, closed_block=closed_block), state

    def attribute_frame(self, line: Line) -> AttributedFrame | None:
        """Attribute a line inside a traceback block.

        Args:
            line: A line known to lie inside a block

        Returns:
            AttributedFrame, or None for context lines that are not frames
        """
        text = line.text.lstrip()

        if (
            self.ENGINE_FRAME_PATTERN.match(text)
            or self.NATIVE_FRAME_PATTERN.match(text)
            or self.TAIL_CALL_PATTERN.match(text)
        ):
            return AttributedFrame(line.number, FrameOrigin.ENGINE)

        addon_match = self.ADDON_FRAME_PATTERN.match(text)
        if addon_match:
            return AttributedFrame(line.number, FrameOrigin.ADDON, addon_match.group(1))

        return None


def _block_start(state: ScanState) -> int:
    if state.block_start is None:
        raise ValueError("Traceback state without a block start")
    return state.block_start
