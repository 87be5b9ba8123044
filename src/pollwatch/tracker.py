"""Per-path modification time cache."""

from __future__ import annotations

from pathlib import Path

from pollwatch.fs import FileSystem, LocalFileSystem


class ModificationTracker:
    """Remembers the last observed modification time of each path.

    The first observation of a path counts as a change; afterwards only a
    strictly newer timestamp does. A tracker belongs to a single watch and is
    not shared between threads.
    """

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        self._fs = filesystem or LocalFileSystem()
        self._times: dict[str, float] = {}

    def has_changed(self, path: Path) -> bool:
        """Check a path against its stored timestamp, updating it if newer.

        Raises:
            FileNotFoundError: If the path no longer exists.
            OSError: If the path cannot be stat'ed.
        """
        mtime = self._fs.last_modified_time(path)
        key = str(path)

        previous = self._times.get(key)
        if previous is None:
            self._times[key] = mtime
            return True

        if previous < mtime:
            self._times[key] = mtime
            return True

        return False

    def last_seen(self, path: Path) -> float | None:
        """Stored timestamp for a path, or None if never observed."""
        return self._times.get(str(path))

    def forget(self, path: Path) -> None:
        """Drop a path so its next observation counts as new."""
        self._times.pop(str(path), None)

    def clear(self) -> None:
        self._times.clear()

    def __len__(self) -> int:
        return len(self._times)

    def __contains__(self, path: object) -> bool:
        return str(path) in self._times
