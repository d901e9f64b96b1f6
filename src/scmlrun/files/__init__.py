"""Filesystem operations for scmlrun."""

from scmlrun.files.discover import discover_files

__all__ = [
    "discover_files",
]
