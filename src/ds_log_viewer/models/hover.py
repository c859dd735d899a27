"""Data models for workshop reference hover cards."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceToken:
    """A ``workshop-<digits>`` token found in a line (0-based, end exclusive)."""

    text: str  # e.g., "workshop-727774324"
    reference_id: str  # e.g., "727774324"
    start: int
    end: int

    def covers_column(self, column: int) -> bool:
        """Check whether a 1-based column lies on this token."""
        return self.start + 1 <= column <= self.end


@dataclass(frozen=True)
class MoreInfoAction:
    """Opens the workshop page for a reference."""

    reference_id: str
    url: str


@dataclass(frozen=True)
class HoverCard:
    """Information shown when the pointer rests on a reference token."""

    token: str
    reference_id: str
    start_column: int  # 1-based, inclusive
    end_column: int  # 1-based, exclusive
    resolvable: bool
    icon_url: str | None = None  # None while the icon is still resolving
    display_name: str | None = None
    more_info: MoreInfoAction | None = None
