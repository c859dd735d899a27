"""Abstract interface for external icon resolution."""

from typing import Protocol


class IconResolver(Protocol):
    """Resolves a workshop id to the URL of its preview image.

    The resolver owns all network access. The icon cache only decides when
    to call it and what to remember.
    """

    async def fetch_icon_url(self, reference_id: str) -> str:
        """
        Fetch the preview image URL for a workshop id.

        Args:
            reference_id: Workshop id (5-15 digits)

        Returns:
            The icon URL, or an empty string when the upstream service does
            not know it yet (the id stays retry-eligible and no failure is
            counted)

        Raises:
            IconResolutionError: If resolution fails
        """
        ...
