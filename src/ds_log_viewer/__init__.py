"""Annotation and navigation engine for Don't Starve log files."""

from ds_log_viewer._version import __version__

__all__ = ["__version__"]
