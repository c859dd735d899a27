"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScanConfig(BaseModel):
    """Traceback scanning configuration."""

    max_line_length: int = Field(
        2000, ge=1, description="Lines at or over this length are never classified"
    )


class IconCacheConfig(BaseModel):
    """Workshop icon resolution configuration."""

    failure_ceiling: int = Field(5, ge=0, le=100)
    fetch_timeout: float | None = Field(
        None, gt=0.0, description="Seconds before a fetch counts as failed; None waits forever"
    )
    prefetch: bool = Field(True, description="Resolve every loaded mod's icon on document load")
    details_url: str = "https://steamcommunity.com/sharedfiles/filedetails/?id={id}"

    @field_validator("details_url")
    @classmethod
    def validate_details_url(cls, v: str) -> str:
        """Require the {id} placeholder."""
        if "{id}" not in v:
            raise ValueError("details_url must contain an {id} placeholder")
        return v


class NavigationConfig(BaseModel):
    """Marker strings used by the navigator."""

    error_marker: str = "LUA ERROR stack traceback:"
    instance_marker: str = "cGame::StartPlaying"

    @field_validator("error_marker", "instance_marker")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        """Markers must be non-empty single-line strings."""
        if not v or "\n" in v:
            raise ValueError("Marker must be a non-empty single line")
        return v


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("ds-log-viewer.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class ViewerConfig(BaseSettings):
    """Root configuration for the log viewer engine."""

    scan: ScanConfig = ScanConfig()
    icons: IconCacheConfig = IconCacheConfig()
    navigation: NavigationConfig = NavigationConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="DS_LOG_VIEWER_",
        env_nested_delimiter="__",
    )

    def details_url_for(self, reference_id: str) -> str:
        """Return the "more info" URL for a workshop id."""
        return self.icons.details_url.replace("{id}", reference_id)
