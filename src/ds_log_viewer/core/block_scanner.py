"""Single-pass traceback scanning over a whole document."""

from __future__ import annotations

import structlog

from ds_log_viewer.core.line_classifier import LineClassifier
from ds_log_viewer.models.document import LogDocument
from ds_log_viewer.models.traceback import (
    AttributedFrame,
    ScanResult,
    ScanState,
    TracebackBlock,
)
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()


class BlockScanner:
    """Drives a LineClassifier across a document, left to right.

    The scan is O(lines) and keeps no state between calls, so scanning an
    unchanged document twice yields equal results.

    Example:
        scanner = BlockScanner()
        result = scanner.scan(document)
        for block in result.blocks:
            print(block.start_line, block.end_line)
    """

    def __init__(self, classifier: LineClassifier | None = None) -> None:
        self._classifier = classifier or LineClassifier()

    def scan(self, document: LogDocument) -> ScanResult:
        """Scan every line and collect blocks and attributed frames.

        Args:
            document: Document to scan

        Returns:
            ScanResult with blocks ordered by start line
        """
        blocks: list[TracebackBlock] = []
        frames: list[AttributedFrame] = []
        skipped = 0
        state = ScanState.outside()

        for line in document.lines():
            try:
                result, state = self._classifier.classify(line, state)
            except Exception as e:
                # A single bad line must never abort the scan
                log.warning(
                    LogEventNames.LINE_CLASSIFICATION_FAILED,
                    line=line.number,
                    error=str(e),
                )
                continue

            if result.closed_block is not None:
                blocks.append(result.closed_block)
            if result.frame is not None:
                frames.append(result.frame)
            if result.skipped:
                skipped += 1

        # Unterminated block runs to the end of the document
        if state.in_traceback and state.block_start is not None:
            blocks.append(TracebackBlock(state.block_start, document.last_line))

        log.debug(
            LogEventNames.SCAN_COMPLETE,
            lines=document.line_count,
            blocks=len(blocks),
            frames=len(frames),
            skipped_lines=skipped,
        )

        return ScanResult(
            blocks=tuple(blocks),
            frames=tuple(frames),
            line_count=document.line_count,
        )
