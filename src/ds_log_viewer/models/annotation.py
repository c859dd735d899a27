"""Data models for overlays pushed to the host view."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .traceback import FrameOrigin, TracebackBlock


class DecorationKind(Enum):
    """Whether a decoration styles whole lines or characters."""

    BLOCK = "block"  # Gutter/line-level styling over a line range
    INLINE = "inline"  # Character-level styling within one line


@dataclass(frozen=True)
class Decoration:
    """A styled range in the document (1-based, inclusive lines)."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    kind: DecorationKind
    css_class: str


@dataclass(frozen=True)
class InlineHint:
    """A label rendered after the end of a line."""

    line: int
    column: int
    label: str
    origin: FrameOrigin


@dataclass(frozen=True)
class CopyBlockAction:
    """A "copy block" affordance attached to one traceback block."""

    command_id: str
    title: str
    block: TracebackBlock
    text: str  # Raw block lines joined with "\n"


@dataclass(frozen=True)
class CopyResult:
    """Outcome of invoking a copy action."""

    success: bool
    text: str
    error: str | None = None


@dataclass(frozen=True)
class AnnotationSet:
    """Everything the host view renders for one scan."""

    decorations: tuple[Decoration, ...] = ()
    hints: tuple[InlineHint, ...] = ()
    actions: tuple[CopyBlockAction, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.decorations or self.hints or self.actions)


@dataclass(frozen=True)
class HighlightToken:
    """A syntax-colouring span on one line (1-based, end exclusive)."""

    line: int
    start_column: int
    end_column: int
    token_type: str  # e.g., "sim-time", "traceback", "workshop-id"
