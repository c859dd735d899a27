"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    FileLoggingConfig,
    IconCacheConfig,
    LoggingConfig,
    NavigationConfig,
    ScanConfig,
    ViewerConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "ViewerConfig",
    # Sections
    "ScanConfig",
    "IconCacheConfig",
    "NavigationConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
