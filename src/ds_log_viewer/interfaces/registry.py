"""Abstract interface for add-on metadata lookup."""

from typing import Protocol

from ..models.addon import AddonInfo


class AddonLookup(Protocol):
    """Add-on metadata supplied by the host, preloaded before a scan.

    ``AddonRegistry`` is the in-memory implementation.
    """

    def lookup(self, addon_dir: str) -> AddonInfo | None:
        """Find an add-on by its directory token (e.g., "workshop-123456789")."""
        ...

    def find_by_reference(self, reference_id: str) -> AddonInfo | None:
        """Find an add-on by its workshop id (e.g., "123456789")."""
        ...
