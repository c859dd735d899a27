"""Data models and transfer objects."""

from .addon import AddonInfo, AddonRegistry
from .annotation import (
    AnnotationSet,
    CopyBlockAction,
    CopyResult,
    Decoration,
    DecorationKind,
    HighlightToken,
    InlineHint,
)
from .document import Line, LogDocument, Position
from .hover import HoverCard, MoreInfoAction, ReferenceToken
from .icon import IconEntry, IconLookup, IconState, IconStatus
from .summary import LogSummary
from .traceback import (
    AttributedFrame,
    Classification,
    FrameOrigin,
    ScanPhase,
    ScanResult,
    ScanState,
    TracebackBlock,
)

__all__ = [
    # Document models
    "Line",
    "LogDocument",
    "Position",
    # Traceback models
    "ScanPhase",
    "ScanState",
    "FrameOrigin",
    "TracebackBlock",
    "AttributedFrame",
    "Classification",
    "ScanResult",
    # Add-on models
    "AddonInfo",
    "AddonRegistry",
    # Overlay models
    "DecorationKind",
    "Decoration",
    "InlineHint",
    "CopyBlockAction",
    "CopyResult",
    "AnnotationSet",
    "HighlightToken",
    # Icon models
    "IconState",
    "IconStatus",
    "IconEntry",
    "IconLookup",
    # Hover models
    "ReferenceToken",
    "MoreInfoAction",
    "HoverCard",
    # Summary
    "LogSummary",
]
