"""One-pass summary of a game log's header and mod list.

This module implements the LogSummarizer class that extracts:
- Build version, platform and architecture
- Databundle mounting state (zip vs. loose files)
- Mods registered by ModIndex and mods actually loaded (name, version,
  workshop id)
- Whether the log contains a Lua stack trace or a Lua crash
- Total run time, taken from the last timestamp prefix

The loaded mods become the AddonRegistry used to name add-on frames.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import structlog

from ds_log_viewer.core.line_classifier import DEFAULT_MAX_LINE_LENGTH, TRACEBACK_MARKER
from ds_log_viewer.models.addon import AddonInfo, AddonRegistry
from ds_log_viewer.models.document import LogDocument
from ds_log_viewer.models.summary import LogSummary
from ds_log_viewer.utils.logging import LogEventNames

log = structlog.get_logger()

GAME_INSTANCE_MARKER = "cGame::StartPlaying"
UNKNOWN = "unknown"


@dataclass
class _SummaryBuilder:
    """Mutable accumulator used while walking the lines."""

    build_version: str = ""
    build_platform: str = ""
    build_arch: str = ""
    databundles: dict[str, bool] = field(default_factory=dict)
    registered_dirs: dict[str, None] = field(default_factory=dict)
    addons: dict[str, AddonInfo] = field(default_factory=dict)
    total_time: tuple[int, int, int] = (0, 0, 0)
    has_stacktrace: bool = False
    has_lua_crash: bool = False

    def fill_unknown(self) -> None:
        self.build_version = self.build_version or UNKNOWN
        self.build_platform = self.build_platform or UNKNOWN
        self.build_arch = self.build_arch or UNKNOWN

    def freeze(self) -> LogSummary:
        return LogSummary(
            build_version=self.build_version,
            build_platform=self.build_platform,
            build_arch=self.build_arch,
            databundles=dict(self.databundles),
            registered_dirs=tuple(self.registered_dirs),
            addons=tuple(self.addons.values()),
            total_time=self.total_time,
            has_stacktrace=self.has_stacktrace,
            has_lua_crash=self.has_lua_crash,
        )


class LogSummarizer:
    """Extracts session facts from a Don't Starve (Together) log.

    Example:
        summary = LogSummarizer().summarize(document)
        registry = summary_registry(summary)
        print(summary.build_version, len(summary.addons))
    """

    TIMESTAMP_PATTERN = re.compile(r"^\[(\d+):(\d+):(\d+)\]:\s")
    BUILD_PATTERN = re.compile(r"^Don't Starve( Together)?: (\d+) ([A-Z0-9_]+)")
    ARCH_PATTERN = re.compile(r"^Mode: ([\w-]+)")
    BUNDLE_PATTERN = re.compile(
        r"^Mounting file system databundles/([\w_]+\.zip) (successful|skipped)\.$"
    )
    LUA_DEBUG_PREFIX = re.compile(r"^scripts/([\w/]+\.lua)\(\d+,\d+\)\s")
    MODDIR_PREFIX = "ModIndex:GetModsToLoad inserting moddir, \t"
    LOADING_MOD_PATTERN = re.compile(r"^(Fontend-|Frontend-)?Loading mod:\s")
    WORKSHOP_DIR_PATTERN = re.compile(r"workshop-(\d+)")
    VERSION_SEPARATOR = " Version:"

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> None:
        self._max_line_length = max_line_length

    def summarize(self, document: LogDocument) -> LogSummary:
        """Walk the document once and return its summary."""
        builder = _SummaryBuilder()
        for line in document.lines():
            if len(line.text) >= self._max_line_length:
                continue
            self._parse_line(builder, line.text.rstrip("\r\n\t"))

        summary = builder.freeze()
        log.debug(
            LogEventNames.SUMMARY_COMPLETE,
            build_version=summary.build_version,
            addons=len(summary.addons),
            has_lua_crash=summary.has_lua_crash,
        )
        return summary

    def _parse_line(self, builder: _SummaryBuilder, line: str) -> None:
        # Only the first 20 characters can hold the prefix
        time_match = self.TIMESTAMP_PATTERN.match(line[:20])
        if time_match:
            hours, minutes, seconds = (int(part) for part in time_match.groups())
            builder.total_time = (hours, minutes, seconds)
            line = line[time_match.end() :]

        if not builder.build_version and line.startswith("Don't Starve"):
            build_match = self.BUILD_PATTERN.match(line)
            if build_match:
                builder.build_version = build_match.group(2)
                builder.build_platform = build_match.group(3)
                return

        if not builder.build_arch:
            arch_match = self.ARCH_PATTERN.match(line)
            if arch_match:
                builder.build_arch = arch_match.group(1)
                return

        bundle_match = self.BUNDLE_PATTERN.match(line)
        if bundle_match:
            builder.databundles[bundle_match.group(1)] = bundle_match.group(2) == "successful"
            return

        if line == GAME_INSTANCE_MARKER:
            builder.fill_unknown()
            return

        debug_match = self.LUA_DEBUG_PREFIX.match(line)
        if debug_match:
            line = line[debug_match.end() :]

        moddir_index = line.find(self.MODDIR_PREFIX)
        if moddir_index >= 0:
            builder.registered_dirs[line[moddir_index + len(self.MODDIR_PREFIX) :]] = None
            return

        loading_match = self.LOADING_MOD_PATTERN.match(line)
        if loading_match and self._parse_loaded_mod(builder, line[loading_match.end() :]):
            return

        if line == "stack traceback:":
            builder.has_stacktrace = True

        if TRACEBACK_MARKER in line:
            builder.has_lua_crash = True

    def _parse_loaded_mod(self, builder: _SummaryBuilder, rest: str) -> bool:
        """Parse ``<dir> (<name>)[ Version:<v>]``; return True if recorded."""
        version: str | None = None
        version_index = rest.rfind(self.VERSION_SEPARATOR)
        if version_index >= 0:
            version = rest[version_index + len(self.VERSION_SEPARATOR) :]
            rest = rest[:version_index]

        workshop_match = self.WORKSHOP_DIR_PATTERN.search(rest)
        if workshop_match:
            addon_dir = workshop_match.group(0)
            name = rest[workshop_match.end() + 2 : -1]
            builder.addons.setdefault(
                addon_dir,
                AddonInfo(addon_dir, name, version, external_ref=workshop_match.group(1)),
            )
            return True

        for addon_dir in builder.registered_dirs:
            if rest.startswith(f"{addon_dir} ("):
                name = rest[len(addon_dir) + 2 : -1]
                builder.addons.setdefault(addon_dir, AddonInfo(addon_dir, name, version))
                return True

        return False


def summary_registry(summary: LogSummary) -> AddonRegistry:
    """Build the add-on registry from a summary's loaded mods."""
    return AddonRegistry(summary.addons)
