"""Data models for line-addressable log documents."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, order=True)
class Position:
    """A 1-based (line, column) location in a document."""

    line: int
    column: int = 1


@dataclass(frozen=True)
class Line:
    """A single document line and its 1-based number."""

    number: int
    text: str

    @property
    def max_column(self) -> int:
        """Column just past the last character."""
        return len(self.text) + 1


class LogDocument:
    """Read-only, line-addressable log text.

    Lines are 1-based. The document also implements the non-wrapping,
    case-sensitive substring search used by the navigator, so a plain
    document can stand in for a host view in headless use.

    Example:
        doc = LogDocument.from_text(path.read_text())
        doc.line_text(1)
        doc.find_next("cGame::StartPlaying", Position(1, 1))
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: tuple[str, ...] = tuple(lines) or ("",)

    @classmethod
    def from_text(cls, text: str) -> LogDocument:
        """Split raw text on \\r\\n, \\r or \\n.

        A trailing line break yields a trailing empty line, and empty text
        yields a single empty line.
        """
        return cls(_LINE_BREAK.split(text))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_line(self) -> int:
        return len(self._lines)

    def line_text(self, number: int) -> str:
        """Return the raw text of a 1-based line.

        Raises:
            IndexError: If the line number is outside the document
        """
        if not 1 <= number <= len(self._lines):
            raise IndexError(f"Line {number} outside document of {len(self._lines)} lines")
        return self._lines[number - 1]

    def lines(self) -> Iterator[Line]:
        """Iterate over every line in order."""
        for index, text in enumerate(self._lines, start=1):
            yield Line(index, text)

    def text_between(self, start_line: int, end_line: int) -> str:
        """Join lines ``start_line`` through ``end_line`` inclusive with newlines."""
        if start_line > end_line:
            return ""
        start = max(start_line, 1)
        end = min(end_line, len(self._lines))
        return "\n".join(self._lines[start - 1 : end])

    def clamp(self, position: Position) -> Position:
        """Return the nearest position that lies inside the document."""
        line = min(max(position.line, 1), len(self._lines))
        max_column = len(self._lines[line - 1]) + 1
        column = min(max(position.column, 1), max_column)
        return Position(line, column)

    # -- search primitive ---------------------------------------------------

    def find_next(self, needle: str, after: Position) -> Position | None:
        """Find the first occurrence starting strictly after ``after``.

        Never wraps to the start of the document.
        """
        if not needle:
            return None
        after = self.clamp(after)

        # 0-based index of the first column strictly after the position
        index = self._lines[after.line - 1].find(needle, after.column)
        if index >= 0:
            return Position(after.line, index + 1)

        for number in range(after.line + 1, len(self._lines) + 1):
            index = self._lines[number - 1].find(needle)
            if index >= 0:
                return Position(number, index + 1)
        return None

    def find_previous(self, needle: str, before: Position) -> Position | None:
        """Find the last occurrence starting strictly before ``before``.

        Never wraps to the end of the document.
        """
        if not needle:
            return None
        before = self.clamp(before)

        # Latest allowed 0-based start index on the cursor line
        last_start = before.column - 2
        if last_start >= 0:
            text = self._lines[before.line - 1]
            index = text.rfind(needle, 0, last_start + len(needle))
            if index >= 0:
                return Position(before.line, index + 1)

        for number in range(before.line - 1, 0, -1):
            index = self._lines[number - 1].rfind(needle)
            if index >= 0:
                return Position(number, index + 1)
        return None

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogDocument):
            return NotImplemented
        return self._lines == other._lines

    def __hash__(self) -> int:
        return hash(self._lines)
