"""Data models for add-on (mod) metadata."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AddonInfo:
    """An add-on as reported by the game when it was loaded."""

    dir: str  # e.g., "workshop-727774324" or a local mod folder
    display_name: str  # e.g., "Craft Pot"
    version: str | None = None
    external_ref: str | None = None  # Steam Workshop id, if any

    @property
    def is_workshop(self) -> bool:
        return self.external_ref is not None


class AddonRegistry:
    """In-memory lookup of add-ons by directory and by workshop id.

    The first entry registered for a directory wins, matching the way the
    game reports a mod once per load.
    """

    def __init__(self, addons: Iterable[AddonInfo] = ()) -> None:
        self._by_dir: dict[str, AddonInfo] = {}
        self._by_ref: dict[str, AddonInfo] = {}
        for addon in addons:
            self.add(addon)

    def add(self, addon: AddonInfo) -> None:
        self._by_dir.setdefault(addon.dir, addon)
        if addon.external_ref:
            self._by_ref.setdefault(addon.external_ref, addon)

    def lookup(self, addon_dir: str) -> AddonInfo | None:
        """Find an add-on by its directory token."""
        return self._by_dir.get(addon_dir)

    def find_by_reference(self, reference_id: str) -> AddonInfo | None:
        """Find an add-on by its workshop id."""
        return self._by_ref.get(reference_id)

    @property
    def workshop_ids(self) -> tuple[str, ...]:
        return tuple(self._by_ref)

    def __iter__(self) -> Iterator[AddonInfo]:
        return iter(self._by_dir.values())

    def __len__(self) -> int:
        return len(self._by_dir)

    def __contains__(self, addon_dir: object) -> bool:
        return addon_dir in self._by_dir
