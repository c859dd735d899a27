"""Data models for Lua traceback blocks and attributed stack frames."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum


class ScanPhase(Enum):
    """Where the scanner is relative to a traceback block."""

    OUTSIDE = "outside"
    INSIDE_TRACEBACK = "inside_traceback"


@dataclass(frozen=True)
class ScanState:
    """State carried from one line to the next during a scan."""

    phase: ScanPhase = ScanPhase.OUTSIDE
    block_start: int | None = None

    @classmethod
    def outside(cls) -> ScanState:
        return cls()

    @classmethod
    def inside(cls, block_start: int) -> ScanState:
        return cls(ScanPhase.INSIDE_TRACEBACK, block_start)

    @property
    def in_traceback(self) -> bool:
        return self.phase is ScanPhase.INSIDE_TRACEBACK


class FrameOrigin(Enum):
    """Which code a stack frame belongs to."""

    ENGINE = "engine"
    ADDON = "addon"


@dataclass(frozen=True)
class TracebackBlock:
    """An inclusive line range holding one reported Lua error."""

    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class AttributedFrame:
    """A stack frame line inside a traceback block."""

    line: int
    origin: FrameOrigin
    addon_dir: str | None = None  # Only set for add-on frames

    @property
    def is_addon(self) -> bool:
        return self.origin is FrameOrigin.ADDON


@dataclass(frozen=True)
class Classification:
    """What a single line contributed to the scan."""

    line: int
    opens_block: bool = False
    closed_block: TracebackBlock | None = None
    frame: AttributedFrame | None = None
    skipped: bool = False  # Oversized line, never pattern-matched


@dataclass(frozen=True)
class ScanResult:
    """Blocks and frames found in one pass over a document."""

    blocks: tuple[TracebackBlock, ...]
    frames: tuple[AttributedFrame, ...]
    line_count: int

    @property
    def has_errors(self) -> bool:
        return bool(self.blocks)

    def block_at(self, line: int) -> TracebackBlock | None:
        """Return the block containing ``line``, if any."""
        index = bisect_right(self.blocks, line, key=lambda block: block.start_line) - 1
        if index < 0:
            return None
        block = self.blocks[index]
        return block if block.contains(line) else None

    def frames_in(self, block: TracebackBlock) -> tuple[AttributedFrame, ...]:
        """Return the attributed frames inside ``block`` in line order."""
        return tuple(frame for frame in self.frames if block.contains(frame.line))
