"""Entry point for inspecting a log file from the command line.

This module loads one log file, runs the annotation engine over it and
prints what a viewer would show:
- Build information and loaded mods
- Every Lua error block with its attributed frames
- Optionally the text of one error block
"""

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from ds_log_viewer._version import __version__

if TYPE_CHECKING:
    from ds_log_viewer.config.schema import ViewerConfig

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str | None = None) -> None:
    """Configure structured logging until the configuration is loaded.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from ds_log_viewer.utils.logging import LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=log_format or "console")


def apply_logging_config(config: "ViewerConfig", args: argparse.Namespace) -> None:
    """Reconfigure logging from the loaded configuration.

    Command line flags win over the configuration file.
    """
    from ds_log_viewer.utils.logging import LogLevel, configure_logging

    configure_logging(
        level=LogLevel.DEBUG if args.debug else config.logging.level,
        log_format=args.format or config.logging.format,
        file_path=config.logging.file.path if config.logging.file.enabled else None,
        file_enabled=config.logging.file.enabled,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="ds-log-viewer",
        description="Inspect Lua errors and mods in a Don't Starve log file",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument("log_file", type=Path, help="Path to a client_log.txt or server_log.txt")

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default=None,
        help="Log output format (default: from configuration, console)",
    )

    parser.add_argument(
        "--report",
        choices=["text", "json"],
        default="text",
        help="Report output format (default: text)",
    )

    parser.add_argument(
        "--block",
        type=int,
        default=None,
        metavar="N",
        help="Print the raw text of the N-th error block (1-based) and exit",
    )

    return parser.parse_args(argv)


def build_report(text: str, config: "ViewerConfig | None" = None) -> dict[str, Any]:
    """Run the engine over log text and collect a JSON-ready report.

    Args:
        text: Raw log text
        config: Loaded configuration (defaults when None)

    Returns:
        Report dictionary with summary, errors and block texts
    """
    from ds_log_viewer.config.schema import ViewerConfig
    from ds_log_viewer.core.annotation_aggregator import AnnotationAggregator
    from ds_log_viewer.core.block_scanner import BlockScanner
    from ds_log_viewer.core.line_classifier import LineClassifier
    from ds_log_viewer.core.log_summary import LogSummarizer, summary_registry
    from ds_log_viewer.models.document import LogDocument

    if config is None:
        config = ViewerConfig()
    max_length = config.scan.max_line_length

    document = LogDocument.from_text(text)
    summary = LogSummarizer(max_length).summarize(document)
    registry = summary_registry(summary)
    scan = BlockScanner(LineClassifier(max_length)).scan(document)
    annotations = AnnotationAggregator().aggregate(document, scan, registry)

    hints_by_line = {hint.line: hint.label for hint in annotations.hints}

    return {
        "lines": document.line_count,
        "summary": {
            "build_version": summary.build_version,
            "build_platform": summary.build_platform,
            "build_arch": summary.build_arch,
            "total_time": list(summary.total_time),
            "has_lua_crash": summary.has_lua_crash,
            "has_stacktrace": summary.has_stacktrace,
            "mods": [
                {
                    "dir": addon.dir,
                    "name": addon.display_name,
                    "version": addon.version,
                    "workshop_id": addon.external_ref,
                }
                for addon in summary.addons
            ],
        },
        "errors": [
            {
                "start_line": action.block.start_line,
                "end_line": action.block.end_line,
                "frames": [
                    {
                        "line": frame.line,
                        "origin": frame.origin.value,
                        "hint": hints_by_line.get(frame.line),
                    }
                    for frame in scan.frames_in(action.block)
                ],
                "text": action.text,
            }
            for action in annotations.actions
        ],
    }


def format_text_report(report: dict[str, Any]) -> str:
    """Render a report for a terminal."""
    summary = report["summary"]
    hours, minutes, seconds = summary["total_time"]
    out = [
        f"Lines:    {report['lines']}",
        f"Build:    {summary['build_version']} {summary['build_platform']} {summary['build_arch']}",
        f"Run time: {hours:02d}:{minutes:02d}:{seconds:02d}",
        f"Mods:     {len(summary['mods'])}",
    ]
    for mod in summary["mods"]:
        version = f" {mod['version']}" if mod["version"] else ""
        out.append(f"  - {mod['name']}{version} ({mod['dir']})")

    out.append(f"Errors:   {len(report['errors'])}")
    for index, error in enumerate(report["errors"], start=1):
        out.append(f"  #{index} lines {error['start_line']}-{error['end_line']}")
        for frame in error["frames"]:
            out.append(f"      line {frame['line']}: {frame['hint']}")
    return "\n".join(out)


def run(args: argparse.Namespace) -> int:
    """Run the inspection.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from ds_log_viewer.config.loader import load_config
    from ds_log_viewer.utils.async_helpers import ConfigError
    from ds_log_viewer.utils.logging import LogEventNames

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        log.error("config_not_found", error=str(e))
        return 1
    except ConfigError as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    apply_logging_config(config, args)

    try:
        text = args.log_file.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as e:
        log.error("file_not_found", error=str(e))
        return 1

    report = build_report(text, config)
    log.info(
        LogEventNames.DOCUMENT_LOADED,
        path=str(args.log_file),
        lines=report["lines"],
        errors=len(report["errors"]),
    )

    if args.block is not None:
        errors = report["errors"]
        if not 1 <= args.block <= len(errors):
            log.error("block_not_found", block=args.block, blocks=len(errors))
            return 1
        print(errors[args.block - 1]["text"])
        return 0

    if args.report == "json":
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        print(format_text_report(report))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_format=args.format)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
