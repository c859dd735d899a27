"""Data models for workshop icon resolution."""

from dataclasses import dataclass
from enum import Enum


class IconState(Enum):
    """Lifecycle of a single id in the icon cache."""

    UNTRIED = "untried"
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"  # Failed at least once, still retry-eligible
    ABANDONED = "abandoned"  # Failure ceiling exceeded for this session


class IconStatus(Enum):
    """What a caller gets back from a resolve call."""

    READY = "ready"
    PENDING = "pending"
    DEFERRED = "deferred"  # No fetch could start; ask again later
    UNAVAILABLE = "unavailable"
    INVALID = "invalid"


@dataclass(frozen=True)
class IconEntry:
    """Cache entry for one workshop id."""

    reference_id: str
    state: IconState = IconState.UNTRIED
    url: str | None = None
    failures: int = 0


@dataclass(frozen=True)
class IconLookup:
    """Result of a synchronous resolve call."""

    status: IconStatus
    url: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.status is IconStatus.READY
