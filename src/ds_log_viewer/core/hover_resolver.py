"""Hover cards for ``workshop-<id>`` references in log lines."""

from __future__ import annotations

import re
from collections.abc import Callable

from ds_log_viewer.core.icon_cache import IconResolutionCache
from ds_log_viewer.interfaces.registry import AddonLookup
from ds_log_viewer.models.hover import HoverCard, MoreInfoAction, ReferenceToken

DEFAULT_DETAILS_URL = "https://steamcommunity.com/sharedfiles/filedetails/?id={id}"


def workshop_details_url(reference_id: str) -> str:
    """Return the Steam Workshop page for an id."""
    return DEFAULT_DETAILS_URL.replace("{id}", reference_id)


class ReferenceHoverResolver:
    """Builds hover cards for workshop references under the pointer.

    Hovering never waits on the network: an icon that is still resolving
    is left out of the card, and the host re-requests the card when the
    icon cache reports a resolution.

    Example:
        resolver = ReferenceHoverResolver(icon_cache, registry)
        card = resolver.hover_at(view.line_text(3), column=17)
    """

    TOKEN_PATTERN = re.compile(r"workshop-(\d+)\b")

    def __init__(
        self,
        icons: IconResolutionCache,
        addons: AddonLookup,
        details_url: Callable[[str], str] = workshop_details_url,
    ) -> None:
        """Initialize the resolver.

        Args:
            icons: Icon cache queried for each card
            addons: Registry used to show a mod's display name
            details_url: Builds the "more info" URL for an id
        """
        self._icons = icons
        self._addons = addons
        self._details_url = details_url

    @property
    def addons(self) -> AddonLookup:
        return self._addons

    @addons.setter
    def addons(self, addons: AddonLookup) -> None:
        self._addons = addons

    def find_tokens(self, line_text: str) -> list[ReferenceToken]:
        """Return every reference token in a line, left to right."""
        return [
            ReferenceToken(
                text=match.group(0),
                reference_id=match.group(1),
                start=match.start(),
                end=match.end(),
            )
            for match in self.TOKEN_PATTERN.finditer(line_text)
        ]

    def hover_at(self, line_text: str, column: int) -> HoverCard | None:
        """Build the card for the token under a 1-based column.

        Args:
            line_text: Raw text of the hovered line
            column: 1-based column of the character under the pointer

        Returns:
            HoverCard, or None when no token covers the column
        """
        token = next(
            (t for t in self.find_tokens(line_text) if t.covers_column(column)),
            None,
        )
        if token is None:
            return None

        reference_id = token.reference_id
        start_column, end_column = token.start + 1, token.end + 1

        if not IconResolutionCache.is_resolvable(reference_id):
            return HoverCard(
                token=token.text,
                reference_id=reference_id,
                start_column=start_column,
                end_column=end_column,
                resolvable=False,
            )

        lookup = self._icons.resolve(reference_id)
        addon = self._addons.find_by_reference(reference_id)

        return HoverCard(
            token=token.text,
            reference_id=reference_id,
            start_column=start_column,
            end_column=end_column,
            resolvable=True,
            icon_url=lookup.url if lookup.is_ready else None,
            display_name=addon.display_name if addon else None,
            more_info=MoreInfoAction(reference_id, self._details_url(reference_id)),
        )
