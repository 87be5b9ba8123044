"""Filesystem primitives used by the polling engine.

The engine only ever stats, lists, and re-stamps paths, so the collaborator is
a small protocol. LocalFileSystem backs it with pathlib/os; tests substitute
in-memory fakes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Filesystem operations required by trackers, watches, and registries."""

    def exists(self, path: Path) -> bool:
        """True if the path exists."""
        ...

    def last_modified_time(self, path: Path) -> float:
        """Modification time in seconds since the epoch.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def set_last_modified_time(self, path: Path, timestamp: float) -> None:
        """Set the modification time of an existing path."""
        ...

    def list_directory(self, directory: Path) -> list[Path]:
        """Entries of a directory, or an empty list if it is missing."""
        ...


class LocalFileSystem:
    """FileSystem backed by the real operating system."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def last_modified_time(self, path: Path) -> float:
        return path.stat().st_mtime

    def set_last_modified_time(self, path: Path, timestamp: float) -> None:
        # Access time is preserved
        atime = path.stat().st_atime
        os.utime(path, (atime, timestamp))

    def list_directory(self, directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir())
        except (FileNotFoundError, NotADirectoryError):
            return []

    def __repr__(self) -> str:
        return "LocalFileSystem()"
