"""Headless TextView backed by a LogDocument.

Used by the command line host and by anything that needs the engine
without a rendering widget; it records the last overlay sets pushed to it.
"""

from __future__ import annotations

from collections.abc import Sequence

from ds_log_viewer.models.annotation import (
    CopyBlockAction,
    Decoration,
    HighlightToken,
    InlineHint,
)
from ds_log_viewer.models.document import LogDocument, Position


class DocumentView:
    """In-memory implementation of the TextView protocol."""

    def __init__(self, document: LogDocument) -> None:
        self._document = document
        self._cursor = Position(1, 1)
        self.decorations: tuple[Decoration, ...] = ()
        self.hints: tuple[InlineHint, ...] = ()
        self.actions: tuple[CopyBlockAction, ...] = ()
        self.tokens: tuple[HighlightToken, ...] = ()
        self.hover_refreshes = 0

    @property
    def document(self) -> LogDocument:
        return self._document

    def replace_document(self, document: LogDocument) -> None:
        """Swap in new text and move the cursor back inside it."""
        self._document = document
        self._cursor = document.clamp(self._cursor)

    @property
    def line_count(self) -> int:
        return self._document.line_count

    def line_text(self, number: int) -> str:
        return self._document.line_text(number)

    def find_next(self, needle: str, after: Position) -> Position | None:
        return self._document.find_next(needle, after)

    def find_previous(self, needle: str, before: Position) -> Position | None:
        return self._document.find_previous(needle, before)

    def get_cursor(self) -> Position:
        return self._cursor

    def set_cursor(self, position: Position) -> None:
        self._cursor = self._document.clamp(position)

    def set_decorations(self, decorations: Sequence[Decoration]) -> None:
        self.decorations = tuple(decorations)

    def set_hints(self, hints: Sequence[InlineHint]) -> None:
        self.hints = tuple(hints)

    def set_actions(self, actions: Sequence[CopyBlockAction]) -> None:
        self.actions = tuple(actions)

    def set_tokens(self, tokens: Sequence[HighlightToken]) -> None:
        self.tokens = tuple(tokens)

    def refresh_hover(self) -> None:
        self.hover_refreshes += 1
