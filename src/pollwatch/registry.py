"""Registry of active watches.

The registry maps the path string a caller asked for to its Watch. It is the
only API surface callers need: watch(), unwatch(), unwatch_all(), touch().

Example:
    registry = WatchRegistry(poll_interval=0.25)
    registry.watch("assets/shaders/*.frag", lambda p: reload_shaders())
    registry.watch("config.json", lambda p: reload_config(p))
    ...
    registry.unwatch_all()

A process-wide registry is available through get_registry() and the module
level watch()/unwatch()/unwatch_all()/touch() helpers in pollwatch.
"""

from __future__ import annotations

import atexit
import os
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from pollwatch.dispatch import Dispatcher
from pollwatch.errors import NotFoundError, WatchError, WatchIOError, WatchResult
from pollwatch.fs import FileSystem, LocalFileSystem
from pollwatch.logging import get_logger
from pollwatch.matcher import WildcardMatcher, has_wildcard
from pollwatch.watch import Watch, WatchCallback

log = get_logger("registry")

PathLike = str | os.PathLike[str]


def parse_watch_path(path: PathLike) -> tuple[str, Path, str]:
    """Split a requested path into (key, directory, filter).

    A wildcard in the final segment makes that segment the filter and its
    parent the polled directory.

    Examples:
        >>> parse_watch_path("shaders/*.frag")
        ('shaders/*.frag', PosixPath('shaders'), '*.frag')
    """
    key = os.fspath(path)
    p = Path(key)
    if has_wildcard(p.name):
        return key, p.parent, p.name
    return key, p, ""


class WatchRegistry:
    """Thread-safe map of watch key to running Watch."""

    def __init__(
        self,
        poll_interval: float | None = None,
        dispatcher: Dispatcher | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            poll_interval: Seconds between ticks for new watches. None reads
                watch.poll_interval from the loaded config.
            dispatcher: Callback invocation strategy shared by all watches.
            filesystem: Filesystem collaborator, LocalFileSystem by default.
        """
        if poll_interval is None:
            from pollwatch.config import get_config

            poll_interval = get_config().watch.poll_interval
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval!r}")

        self._poll_interval = poll_interval
        self._dispatcher = dispatcher
        self._fs = filesystem or LocalFileSystem()
        self._watches: dict[str, Watch] = {}
        self._lock = threading.Lock()
        self._created = datetime.now()

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def filesystem(self) -> FileSystem:
        return self._fs

    def watch(self, path: PathLike, callback: WatchCallback | None) -> None:
        """Start watching a file or a wildcard pattern.

        Registering a key that is already watched does nothing; the first
        callback stays in place. A None callback unregisters the path, and
        an empty path with a None callback unregisters everything.

        Args:
            path: File or directory path, optionally ending in a segment with
                one "*" (e.g. "shaders/*.frag").
            callback: Called with the changed path (the filter path for
                wildcard watches).

        Raises:
            NotFoundError: If the path is missing, or no entry currently
                matches the wildcard.
        """
        self.try_watch(path, callback).unwrap()

    def try_watch(self, path: PathLike, callback: WatchCallback | None) -> WatchResult:
        """Like watch(), but report failures in the returned WatchResult."""
        key = os.fspath(path)

        if callback is None:
            if key:
                self.unwatch(key)
            else:
                self.unwatch_all()
            return WatchResult(path=key)

        if not key:
            return WatchResult(path=key, error=NotFoundError(key, "empty path"))

        key, directory, filter = parse_watch_path(key)
        try:
            self._validate(key, directory, filter)
        except WatchError as e:
            log.debug("Refusing to watch %s: %s", key, e)
            return WatchResult(path=key, error=e)

        with self._lock:
            if key in self._watches:
                log.debug("Already watching %s", key)
                return WatchResult(path=key)
            watch = Watch(
                key,
                directory,
                filter,
                callback,
                poll_interval=self._poll_interval,
                dispatcher=self._dispatcher,
                filesystem=self._fs,
            )
            self._watches[key] = watch

        # Started outside the lock so callbacks can use the registry
        watch.start()
        log.info("Watching %s", key)
        return WatchResult(path=key, created=True)

    def unwatch(self, path: PathLike) -> None:
        """Stop and remove the watch registered under path, if any.

        Blocks until the watch's polling thread has exited.
        """
        key = os.fspath(path)
        with self._lock:
            watch = self._watches.pop(key, None)
        if watch is None:
            return
        watch.stop()
        log.info("Unwatched %s", key)

    def unwatch_all(self) -> None:
        """Stop and remove every watch, waiting for all of them to exit."""
        with self._lock:
            watches = list(self._watches.values())
            self._watches.clear()
        for watch in watches:
            watch.stop()
        if watches:
            log.info("Unwatched %d path(s)", len(watches))

    def close(self) -> None:
        self.unwatch_all()

    def touch(self, path: PathLike, timestamp: float | datetime | None = None) -> None:
        """Set a path's modification time, by default to now.

        Raises:
            NotFoundError: If the path does not exist.
            WatchIOError: If the time cannot be set.
        """
        touch(path, timestamp, filesystem=self._fs)

    def get(self, path: PathLike) -> Watch | None:
        with self._lock:
            return self._watches.get(os.fspath(path))

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._watches)

    def get_status(self) -> dict[str, Any]:
        """Status of the registry and each of its watches."""
        with self._lock:
            watches = list(self._watches.values())
        return {
            "poll_interval": self._poll_interval,
            "created": self._created,
            "total_watches": len(watches),
            "watches": {w.key: w.get_status() for w in watches},
        }

    def _validate(self, key: str, directory: Path, filter: str) -> None:
        if not filter:
            if not self._fs.exists(directory):
                raise NotFoundError(key)
            return

        if not self._fs.exists(directory):
            raise NotFoundError(key, "directory does not exist")
        matcher = WildcardMatcher(filter)
        try:
            entries = self._fs.list_directory(directory)
        except OSError as e:
            raise WatchIOError(f"Failed to list {directory}: {e}", key) from e
        if not any(matcher(entry.name) for entry in entries):
            raise NotFoundError(key, "no entry matches the filter")

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        with self._lock:
            return os.fspath(path) in self._watches

    def __len__(self) -> int:
        with self._lock:
            return len(self._watches)

    def __enter__(self) -> WatchRegistry:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<WatchRegistry watches={len(self)} interval={self._poll_interval}>"


def touch(
    path: PathLike,
    timestamp: float | datetime | None = None,
    *,
    filesystem: FileSystem | None = None,
) -> None:
    """Set the modification time of path (default: now).

    The change is picked up by any watch on the next tick like any other
    modification.

    Raises:
        NotFoundError: If the path does not exist.
        WatchIOError: If the time cannot be set.
    """
    fs = filesystem or LocalFileSystem()
    target = Path(os.fspath(path))

    if timestamp is None:
        timestamp = time.time()
    elif isinstance(timestamp, datetime):
        timestamp = timestamp.timestamp()

    if not fs.exists(target):
        raise NotFoundError(target)
    try:
        fs.set_last_modified_time(target, timestamp)
    except FileNotFoundError as e:
        raise NotFoundError(target) from e
    except OSError as e:
        raise WatchIOError(f"Failed to set modification time of {target}: {e}", target) from e


# Process-wide registry
_default_registry: WatchRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> WatchRegistry:
    """Get the process-wide registry, creating it on first use.

    The registry is torn down (every watch stopped) at interpreter exit.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = WatchRegistry()
            atexit.register(_default_registry.close)
        return _default_registry


def reset_registry() -> None:
    """Stop every watch of the process-wide registry and discard it."""
    global _default_registry
    with _default_lock:
        registry = _default_registry
        _default_registry = None
    if registry is not None:
        atexit.unregister(registry.close)
        registry.close()
