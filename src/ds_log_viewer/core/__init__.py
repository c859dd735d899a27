"""Core annotation and navigation engine.

This module exports the main engine classes:
- LineClassifier: Two-state per-line traceback classification
- BlockScanner: Single-pass traceback block and frame detection
- AnnotationAggregator: Decorations, inline hints and copy actions
- IconResolutionCache: Pull-driven, bounded-retry workshop icon cache
- ReferenceHoverResolver: Hover cards for workshop references
- Navigator: Next/previous marker navigation
- LogSummarizer: Build info and mod list extraction
- LogHighlighter: Syntax-colouring tokens
- ViewerSession: Orchestrates all of the above for one host view
"""

from ds_log_viewer.core.annotation_aggregator import (
    AnnotationAggregator,
    HintLabels,
    invoke_copy_action,
)
from ds_log_viewer.core.block_scanner import BlockScanner
from ds_log_viewer.core.document_view import DocumentView
from ds_log_viewer.core.highlighter import LogHighlighter
from ds_log_viewer.core.hover_resolver import ReferenceHoverResolver
from ds_log_viewer.core.icon_cache import IconResolutionCache
from ds_log_viewer.core.line_classifier import LineClassifier
from ds_log_viewer.core.log_summary import LogSummarizer, summary_registry
from ds_log_viewer.core.navigator import Direction, NavigateAction, Navigator
from ds_log_viewer.core.session import ViewerSession, create_session

__all__ = [
    "AnnotationAggregator",
    "BlockScanner",
    "Direction",
    "DocumentView",
    "HintLabels",
    "IconResolutionCache",
    "LineClassifier",
    "LogHighlighter",
    "LogSummarizer",
    "NavigateAction",
    "Navigator",
    "ReferenceHoverResolver",
    "ViewerSession",
    "create_session",
    "invoke_copy_action",
    "summary_registry",
]
