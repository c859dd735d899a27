"""Data model for the log header summary."""

from dataclasses import dataclass, field

from .addon import AddonInfo


@dataclass(frozen=True)
class LogSummary:
    """Facts about a game session gathered from its log."""

    build_version: str = ""  # e.g., "654321"
    build_platform: str = ""  # e.g., "WIN32_STEAM"
    build_arch: str = ""  # e.g., "64-bit"
    databundles: dict[str, bool] = field(default_factory=dict)  # True: mounted from zip
    registered_dirs: tuple[str, ...] = ()
    addons: tuple[AddonInfo, ...] = ()
    total_time: tuple[int, int, int] = (0, 0, 0)  # last timestamp seen
    has_stacktrace: bool = False
    has_lua_crash: bool = False

    @property
    def workshop_ids(self) -> tuple[str, ...]:
        return tuple(addon.external_ref for addon in self.addons if addon.external_ref)

    @property
    def total_seconds(self) -> int:
        hours, minutes, seconds = self.total_time
        return hours * 3600 + minutes * 60 + seconds
