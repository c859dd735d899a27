"""Abstract interface for the host text view."""

from collections.abc import Sequence
from typing import Protocol

from ..models.annotation import CopyBlockAction, Decoration, HighlightToken, InlineHint
from ..models.document import Position


class SearchProvider(Protocol):
    """Exact-substring search over line-addressable text.

    Implementations must not wrap around: ``find_next`` only reports
    occurrences starting strictly after the position, ``find_previous``
    only those starting strictly before it.
    """

    @property
    def line_count(self) -> int:
        """Number of lines in the document."""
        ...

    def line_text(self, number: int) -> str:
        """Raw text of a 1-based line."""
        ...

    def find_next(self, needle: str, after: Position) -> Position | None:
        """Start of the first occurrence after ``after``, or None."""
        ...

    def find_previous(self, needle: str, before: Position) -> Position | None:
        """Start of the last occurrence before ``before``, or None."""
        ...


class TextView(SearchProvider, Protocol):
    """The rendering widget hosting a log document.

    The engine only reads text, moves the cursor and replaces overlay
    sets; every ``set_*`` call replaces what was pushed before.
    """

    def get_cursor(self) -> Position:
        """Current cursor position."""
        ...

    def set_cursor(self, position: Position) -> None:
        """Move the cursor and reveal the position."""
        ...

    def set_decorations(self, decorations: Sequence[Decoration]) -> None:
        """Replace all styled ranges."""
        ...

    def set_hints(self, hints: Sequence[InlineHint]) -> None:
        """Replace all end-of-line hints."""
        ...

    def set_actions(self, actions: Sequence[CopyBlockAction]) -> None:
        """Replace all block actions (e.g., code lenses)."""
        ...

    def set_tokens(self, tokens: Sequence[HighlightToken]) -> None:
        """Replace syntax-colouring spans."""
        ...

    def refresh_hover(self) -> None:
        """Re-render any visible hover card (e.g., after an icon resolved)."""
        ...
