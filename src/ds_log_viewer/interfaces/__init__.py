"""Protocol definitions for host collaborators."""

from .clipboard import Clipboard, Notifier
from .registry import AddonLookup
from .resolver import IconResolver
from .view import SearchProvider, TextView

__all__ = [
    "AddonLookup",
    "Clipboard",
    "IconResolver",
    "Notifier",
    "SearchProvider",
    "TextView",
]
