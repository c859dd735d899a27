"""Tests for the command line entry point."""

import json
import logging
from pathlib import Path

import pytest

from ds_log_viewer.__main__ import build_report, format_text_report, main, parse_args

LOG_PATH = Path(__file__).parent.parent / "fixtures" / "logs" / "client_log.txt"


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Test default options."""
        args = parse_args([str(LOG_PATH)])

        assert args.log_file == LOG_PATH
        assert args.config is None
        assert not args.debug
        assert args.report == "text"
        assert args.block is None

    def test_format_defers_to_config(self) -> None:
        """Test that the log format is left to the configuration by default."""
        assert parse_args([str(LOG_PATH)]).format is None
        assert parse_args([str(LOG_PATH), "--format", "json"]).format == "json"


class TestBuildReport:
    """Tests for report building."""

    def test_report(self, client_log_text: str) -> None:
        """Test the summary and errors of the sample log."""
        report = build_report(client_log_text)

        assert report["lines"] == 23
        assert report["summary"]["build_version"] == "654321"
        assert [mod["name"] for mod in report["summary"]["mods"]] == [
            "Craft Pot",
            "My Local Mod",
        ]
        assert [(e["start_line"], e["end_line"]) for e in report["errors"]] == [
            (13, 18),
            (22, 23),
        ]
        assert report["errors"][0]["frames"][2] == {
            "line": 16,
            "origin": "addon",
            "hint": "In Add-on: Craft Pot",
        }

    def test_text_report(self, client_log_text: str) -> None:
        """Test the terminal rendering."""
        text = format_text_report(build_report(client_log_text))

        assert "Build:    654321 WIN32_STEAM 64-bit" in text
        assert "Run time: 00:02:30" in text
        assert "  - Craft Pot 1.6.2 (workshop-727774324)" in text
        assert "      line 17: In Add-on: unknown_mod" in text


class TestMain:
    """Tests for the main entry point."""

    def test_json_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test printing the JSON report."""
        assert main([str(LOG_PATH), "--report", "json"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert len(report["errors"]) == 2

    def test_print_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test printing the raw text of one block."""
        assert main([str(LOG_PATH), "--block", "2"]) == 0

        assert capsys.readouterr().out.startswith("LUA ERROR stack traceback:\n    ../mods/")

    def test_missing_block(self) -> None:
        """Test asking for a block that does not exist."""
        assert main([str(LOG_PATH), "--block", "3"]) == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a log file that does not exist."""
        assert main([str(tmp_path / "missing.txt")]) == 1

    def test_invalid_config(self, tmp_path: Path) -> None:
        """Test an invalid configuration file."""
        config = tmp_path / "config.yaml"
        config.write_text("scan:\n  max_line_length: 0\n")

        assert main([str(LOG_PATH), "--config", str(config)]) == 1

    def test_missing_config(self, tmp_path: Path) -> None:
        """Test a configuration file that does not exist."""
        assert main([str(LOG_PATH), "--config", str(tmp_path / "nope.yaml")]) == 1

    def test_logging_section_applied(self, tmp_path: Path) -> None:
        """Test that file logging from the configuration receives log events."""
        log_path = tmp_path / "logs" / "viewer.log"
        config = tmp_path / "config.yaml"
        config.write_text(
            "logging:\n"
            "  level: INFO\n"
            "  format: json\n"
            "  file:\n"
            "    enabled: true\n"
            f"    path: {log_path}\n"
        )

        try:
            assert main([str(LOG_PATH), "--config", str(config)]) == 0
        finally:
            for handler in logging.getLogger().handlers:
                handler.flush()
                if isinstance(handler, logging.FileHandler):
                    handler.close()

        assert log_path.exists()
        assert "document_loaded" in log_path.read_text()
