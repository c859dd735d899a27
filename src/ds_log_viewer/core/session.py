"""Host-facing orchestration of the annotation engine.

The ViewerSession owns one document's derived state and enforces the
ordering the engine relies on: summary -> scan -> aggregate -> overlay push
must finish before hover or navigation requests are served.
"""

from __future__ import annotations

import structlog

from ds_log_viewer.config.schema import ViewerConfig
from ds_log_viewer.core.annotation_aggregator import (
    AnnotationAggregator,
    HintLabels,
    invoke_copy_action,
)
from ds_log_viewer.core.block_scanner import BlockScanner
from ds_log_viewer.core.highlighter import LogHighlighter
from ds_log_viewer.core.hover_resolver import ReferenceHoverResolver
from ds_log_viewer.core.icon_cache import IconResolutionCache
from ds_log_viewer.core.line_classifier import LineClassifier
from ds_log_viewer.core.log_summary import LogSummarizer, summary_registry
from ds_log_viewer.core.navigator import NavigateAction, Navigator
from ds_log_viewer.interfaces.clipboard import Clipboard, Notifier
from ds_log_viewer.interfaces.registry import AddonLookup
from ds_log_viewer.interfaces.resolver import IconResolver
from ds_log_viewer.interfaces.view import TextView
from ds_log_viewer.models.addon import AddonRegistry
from ds_log_viewer.models.annotation import AnnotationSet, CopyResult
from ds_log_viewer.models.document import LogDocument, Position
from ds_log_viewer.models.hover import HoverCard
from ds_log_viewer.models.summary import LogSummary
from ds_log_viewer.models.traceback import ScanResult
from ds_log_viewer.utils.async_helpers import SessionNotReadyError
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()


class ViewerSession:
    """Connects the engine components to one host view.

    Responsibilities:
    - Run summary, scan and aggregation on load and push overlays
    - Serve hover cards and navigation once the document is ready
    - Ask the view to refresh hovers when an icon resolves
    - Run copy actions against the host clipboard

    The icon cache is shared across reloads; it is keyed by workshop id,
    not by line.

    Example:
        session = create_session(view, resolver, clipboard, notifier)
        session.load()
        session.navigate(NavigateAction.NEXT_ERROR)
    """

    def __init__(
        self,
        view: TextView,
        icons: IconResolutionCache,
        clipboard: Clipboard,
        notifier: Notifier,
        config: ViewerConfig | None = None,
        addons: AddonLookup | None = None,
        labels: HintLabels | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            view: Host text view
            icons: Icon cache (survives document reloads)
            clipboard: Host clipboard for copy actions
            notifier: Host notification sink
            config: Viewer configuration
            addons: Host add-on registry; defaults to mods found in the log
            labels: Hint and action strings
        """
        self._view = view
        self._icons = icons
        self._clipboard = clipboard
        self._notifier = notifier
        self._config = config or ViewerConfig()
        self._host_addons = addons

        max_length = self._config.scan.max_line_length
        self._summarizer = LogSummarizer(max_length)
        self._scanner = BlockScanner(LineClassifier(max_length))
        self._aggregator = AnnotationAggregator(labels)
        self._highlighter = LogHighlighter(max_length)
        self._hover = ReferenceHoverResolver(
            icons,
            addons if addons is not None else AddonRegistry(),
            details_url=self._config.details_url_for,
        )
        self._navigator = Navigator(view, self._config.navigation)

        self._document: LogDocument | None = None
        self._summary: LogSummary | None = None
        self._scan: ScanResult | None = None
        self._annotations = AnnotationSet()
        self._ready = False
        self._unsubscribe = icons.subscribe(self._on_icon_resolved)

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def document(self) -> LogDocument | None:
        return self._document

    @property
    def summary(self) -> LogSummary | None:
        return self._summary

    @property
    def scan_result(self) -> ScanResult | None:
        return self._scan

    @property
    def annotations(self) -> AnnotationSet:
        return self._annotations

    @property
    def icons(self) -> IconResolutionCache:
        return self._icons

    def load(self, document: LogDocument | None = None) -> AnnotationSet:
        """Scan a document and push its overlays to the view.

        Args:
            document: Document to load; read from the view when omitted

        Returns:
            The AnnotationSet pushed to the view
        """
        reloading = self._document is not None
        self._ready = False

        if document is None:
            document = LogDocument(
                self._view.line_text(number) for number in range(1, self._view.line_count + 1)
            )

        summary = self._summarizer.summarize(document)
        addons: AddonLookup
        if self._host_addons is not None:
            addons = self._host_addons
        else:
            addons = summary_registry(summary)
        scan = self._scanner.scan(document)
        annotations = self._aggregator.aggregate(document, scan, addons)

        self._view.set_decorations(annotations.decorations)
        self._view.set_hints(annotations.hints)
        self._view.set_actions(annotations.actions)
        self._view.set_tokens(self._highlighter.highlight(document))
        log.debug(
            LogEventNames.OVERLAYS_PUSHED,
            decorations=len(annotations.decorations),
            hints=len(annotations.hints),
            actions=len(annotations.actions),
        )

        self._document = document
        self._summary = summary
        self._scan = scan
        self._annotations = annotations
        self._hover.addons = addons
        self._ready = True

        if self._config.icons.prefetch:
            self._icons.prefetch(summary.workshop_ids)

        log.info(
            LogEventNames.DOCUMENT_RELOADED if reloading else LogEventNames.DOCUMENT_LOADED,
            lines=document.line_count,
            blocks=len(scan.blocks),
            addons=len(summary.addons),
        )
        return annotations

    def hover(self, position: Position) -> HoverCard | None:
        """Return the hover card for a position, if a reference lies there.

        Raises:
            SessionNotReadyError: If no document has finished loading
        """
        document = self._require_document()
        if not 1 <= position.line <= document.line_count:
            return None
        return self._hover.hover_at(document.line_text(position.line), position.column)

    def navigate(self, action: NavigateAction) -> Position | None:
        """Move the view's cursor to the next/previous marker.

        Raises:
            SessionNotReadyError: If no document has finished loading
        """
        self._require_document()
        return self._navigator.perform(action, self._view)

    def copy_block(self, index: int) -> CopyResult:
        """Copy the text of the ``index``-th traceback block.

        Raises:
            SessionNotReadyError: If no document has finished loading
            IndexError: If there is no such block
        """
        self._require_document()
        action = self._annotations.actions[index]
        return invoke_copy_action(
            action, self._clipboard, self._notifier, self._aggregator.labels
        )

    def close(self) -> None:
        """Stop listening to the icon cache."""
        self._unsubscribe()
        self._ready = False

    def _require_document(self) -> LogDocument:
        if not self._ready or self._document is None:
            raise SessionNotReadyError("No document has been loaded into the session")
        return self._document

    def _on_icon_resolved(self, reference_id: str, url: str) -> None:
        if self._ready:
            self._view.refresh_hover()


def create_session(
    view: TextView,
    resolver: IconResolver,
    clipboard: Clipboard,
    notifier: Notifier,
    config: ViewerConfig | None = None,
    addons: AddonLookup | None = None,
) -> ViewerSession:
    """Build a ViewerSession and its icon cache from configuration.

    Args:
        view: Host text view
        resolver: External icon resolver
        clipboard: Host clipboard
        notifier: Host notification sink
        config: Viewer configuration (defaults when omitted)
        addons: Host add-on registry (mods found in the log when omitted)

    Returns:
        A session ready for ``load``
    """
    config = config or ViewerConfig()
    icons = IconResolutionCache(
        resolver,
        failure_ceiling=config.icons.failure_ceiling,
        fetch_timeout=config.icons.fetch_timeout,
    )
    return ViewerSession(view, icons, clipboard, notifier, config=config, addons=addons)
