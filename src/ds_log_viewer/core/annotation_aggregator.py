"""Conversion of scan results into host overlays.

This module turns a ScanResult into the three overlay sets a host view
renders:
1. Decorations - one block-level range per traceback plus per-line emphasis
2. Inline hints - "In Game" / "In Add-on: <name>" after each attributed frame
3. Actions - one "copy block" command per traceback

Every call rebuilds all three sets from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ds_log_viewer.interfaces.clipboard import Clipboard, Notifier
from ds_log_viewer.interfaces.registry import AddonLookup
from ds_log_viewer.models.annotation import (
    AnnotationSet,
    CopyBlockAction,
    CopyResult,
    Decoration,
    DecorationKind,
    InlineHint,
)
from ds_log_viewer.models.document import LogDocument
from ds_log_viewer.models.traceback import AttributedFrame, FrameOrigin, ScanResult
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()


@dataclass(frozen=True)
class HintLabels:
    """User-facing strings, replaceable by a host with translations."""

    engine: str = "In Game"
    addon: str = "In Add-on: {name}"
    copy_title: str = "Copy Error Messages"
    copy_success: str = "Successfully copied error messages to clipboard."
    copy_failure: str = "Failed to copy error messages to clipboard."


class AnnotationAggregator:
    """Builds decorations, hints and copy actions from a scan.

    Example:
        aggregator = AnnotationAggregator()
        annotations = aggregator.aggregate(document, scan_result, registry)
        view.set_decorations(annotations.decorations)
    """

    BLOCK_CLASS = "lua_error_decoration"
    INLINE_CLASS = "lua_error_decoration_inline"

    def __init__(self, labels: HintLabels | None = None) -> None:
        self._labels = labels or HintLabels()

    @property
    def labels(self) -> HintLabels:
        return self._labels

    def aggregate(
        self,
        document: LogDocument,
        scan: ScanResult,
        addons: AddonLookup,
    ) -> AnnotationSet:
        """Build a fresh AnnotationSet.

        Args:
            document: The scanned document (for line text)
            scan: Result of scanning ``document``
            addons: Add-on metadata used to name add-on frames

        Returns:
            AnnotationSet with decorations, hints and actions
        """
        decorations: list[Decoration] = []
        actions: list[CopyBlockAction] = []

        for block in scan.blocks:
            decorations.append(
                Decoration(
                    start_line=block.start_line,
                    start_column=1,
                    end_line=block.end_line,
                    end_column=1,
                    kind=DecorationKind.BLOCK,
                    css_class=self.BLOCK_CLASS,
                )
            )
            for number in range(block.start_line, block.end_line + 1):
                decorations.append(
                    Decoration(
                        start_line=number,
                        start_column=1,
                        end_line=number,
                        end_column=len(document.line_text(number)) + 1,
                        kind=DecorationKind.INLINE,
                        css_class=self.INLINE_CLASS,
                    )
                )
            actions.append(
                CopyBlockAction(
                    command_id=f"copy-block-{block.start_line}-{block.end_line}",
                    title=self._labels.copy_title,
                    block=block,
                    text=document.text_between(block.start_line, block.end_line),
                )
            )

        hints = tuple(self._hint_for(document, frame, addons) for frame in scan.frames)

        return AnnotationSet(
            decorations=tuple(decorations),
            hints=hints,
            actions=tuple(actions),
        )

    def hint_label(self, frame: AttributedFrame, addons: AddonLookup) -> str:
        """Return the label text for one attributed frame."""
        if frame.origin is FrameOrigin.ENGINE:
            return self._labels.engine

        addon_dir = frame.addon_dir or ""
        addon = addons.lookup(addon_dir)
        name = addon.display_name if addon and addon.display_name else addon_dir
        return self._labels.addon.format(name=name)

    def _hint_for(
        self,
        document: LogDocument,
        frame: AttributedFrame,
        addons: AddonLookup,
    ) -> InlineHint:
        return InlineHint(
            line=frame.line,
            column=len(document.line_text(frame.line)) + 1,
            label=self.hint_label(frame, addons),
            origin=frame.origin,
        )


def invoke_copy_action(
    action: CopyBlockAction,
    clipboard: Clipboard,
    notifier: Notifier,
    labels: HintLabels | None = None,
) -> CopyResult:
    """Copy a block's text to the clipboard and tell the user how it went.

    Never raises; a clipboard failure is reported through ``notifier`` and
    the returned CopyResult, and the action's text is left untouched.

    Args:
        action: The block action to run
        clipboard: Host clipboard
        notifier: Host notification sink
        labels: Message strings (defaults to English)

    Returns:
        CopyResult describing the outcome
    """
    labels = labels or HintLabels()

    try:
        clipboard.write_text(action.text)
    except Exception as e:
        log.warning(
            LogEventNames.BLOCK_COPY_FAILED,
            start_line=action.block.start_line,
            end_line=action.block.end_line,
            error=str(e),
        )
        notifier.notify(labels.copy_failure, False)
        return CopyResult(success=False, text=action.text, error=str(e))

    log.info(
        LogEventNames.BLOCK_COPIED,
        start_line=action.block.start_line,
        end_line=action.block.end_line,
        characters=len(action.text),
    )
    notifier.notify(labels.copy_success, True)
    return CopyResult(success=True, text=action.text)
