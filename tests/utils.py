"""Shared test utilities for pollwatch tests."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

FAST_INTERVAL = 0.02


def wait_for(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll predicate until it returns True or timeout elapses.

    Returns:
        The final value of predicate().
    """
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class Recorder:
    """Callback that records every path it is called with."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> None:
        self.calls.append(path)

    @property
    def count(self) -> int:
        return len(self.calls)


class FakeFileSystem:
    """In-memory FileSystem with settable modification times.

    Directories have no timestamp of their own beyond 0.0; files live directly
    under a registered directory.
    """

    def __init__(self) -> None:
        self.files: dict[Path, float] = {}
        self.dirs: set[Path] = set()
        self.stat_error: OSError | None = None
        self.path_errors: dict[Path, OSError] = {}
        self.set_error: OSError | None = None

    def add_dir(self, path: str | Path) -> Path:
        p = Path(path)
        self.dirs.add(p)
        return p

    def add_file(self, path: str | Path, mtime: float = 1.0) -> Path:
        p = Path(path)
        self.dirs.add(p.parent)
        self.files[p] = mtime
        return p

    def remove(self, path: str | Path) -> None:
        p = Path(path)
        self.files.pop(p, None)
        if p in self.dirs:
            self.dirs.discard(p)
            for child in [f for f in self.files if f.parent == p]:
                del self.files[child]

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.dirs

    def last_modified_time(self, path: Path) -> float:
        if self.stat_error is not None:
            raise self.stat_error
        if path in self.path_errors:
            raise self.path_errors[path]
        if path in self.files:
            return self.files[path]
        if path in self.dirs:
            return 0.0
        raise FileNotFoundError(str(path))

    def set_last_modified_time(self, path: Path, timestamp: float) -> None:
        if self.set_error is not None:
            raise self.set_error
        if path not in self.files:
            raise FileNotFoundError(str(path))
        self.files[path] = timestamp

    def list_directory(self, directory: Path) -> list[Path]:
        if directory not in self.dirs:
            return []
        return sorted(f for f in self.files if f.parent == directory)
