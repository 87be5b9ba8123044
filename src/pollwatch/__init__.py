"""pollwatch: polling file watcher for hot-reloading during development.

Example:
    import pollwatch

    pollwatch.watch("assets/shaders/*.frag", lambda path: reload_shaders())
    pollwatch.watch("settings.json", load_settings)
    ...
    pollwatch.unwatch("settings.json")
    pollwatch.unwatch_all()
"""

from __future__ import annotations

__version__ = "0.1.0"

from datetime import datetime

from pollwatch.config import Config, get_config, load_config
from pollwatch.dispatch import AsyncioDispatcher, Dispatcher, QueueDispatcher, call_directly
from pollwatch.errors import NotFoundError, WatchError, WatchIOError, WatchResult
from pollwatch.fs import FileSystem, LocalFileSystem
from pollwatch.logging import get_logger, setup_logging
from pollwatch.matcher import WildcardMatcher, matches, split_filter
from pollwatch.registry import (
    PathLike,
    WatchRegistry,
    get_registry,
    parse_watch_path,
    reset_registry,
)
from pollwatch.registry import touch as _touch
from pollwatch.tracker import ModificationTracker
from pollwatch.watch import Watch, WatchCallback, WatchState


def watch(path: PathLike, callback: WatchCallback | None) -> None:
    """Watch a path with the process-wide registry. See WatchRegistry.watch()."""
    get_registry().watch(path, callback)


def unwatch(path: PathLike) -> None:
    """Stop watching a path in the process-wide registry."""
    get_registry().unwatch(path)


def unwatch_all() -> None:
    """Stop every watch of the process-wide registry."""
    get_registry().unwatch_all()


def touch(path: PathLike, timestamp: float | datetime | None = None) -> None:
    """Set the modification time of a path, by default to now."""
    _touch(path, timestamp)


__all__ = [
    # Module-level API
    "watch",
    "unwatch",
    "unwatch_all",
    "touch",
    "get_registry",
    "reset_registry",
    # Core types
    "WatchRegistry",
    "Watch",
    "WatchState",
    "WatchCallback",
    "ModificationTracker",
    "WildcardMatcher",
    "matches",
    "split_filter",
    "parse_watch_path",
    # Dispatch
    "Dispatcher",
    "call_directly",
    "QueueDispatcher",
    "AsyncioDispatcher",
    # Filesystem
    "FileSystem",
    "LocalFileSystem",
    # Errors
    "WatchError",
    "NotFoundError",
    "WatchIOError",
    "WatchResult",
    # Config and logging
    "Config",
    "get_config",
    "load_config",
    "get_logger",
    "setup_logging",
]
