"""Config file watcher for automatic reload on changes.

Watches the config files that exist when start() is called, using a
WatchRegistry of its own, and reloads config whenever one of them changes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pollwatch.config.loader import reload_config
from pollwatch.config.paths import get_config_paths

if TYPE_CHECKING:
    from pollwatch.registry import WatchRegistry
    from pollwatch.watch import WatchCallback

_log = logging.getLogger("pollwatch.config.watcher")

DEFAULT_POLL_INTERVAL = 2.0


class ConfigWatcher:
    """Reloads configuration when a config file is modified."""

    def __init__(
        self,
        project_root: str | Path | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        registry: WatchRegistry | None = None,
    ) -> None:
        """Initialize the config watcher.

        Args:
            project_root: Optional project directory to watch.
            poll_interval: How often to check for changes (seconds). Ignored
                when a registry is given.
            registry: Registry to add watches to. A private one is created
                on start() if omitted.
        """
        self._project_root = project_root
        self._poll_interval = poll_interval
        self._registry = registry
        self._owns_registry = registry is None
        self._watched: list[Path] = []
        self._running = False

    @property
    def watched_paths(self) -> list[Path]:
        return list(self._watched)

    def start(self) -> None:
        """Start watching every config file that currently exists."""
        if self._running:
            return

        if self._registry is None:
            from pollwatch.registry import WatchRegistry

            self._registry = WatchRegistry(poll_interval=self._poll_interval)

        for path in get_config_paths(self._project_root):
            if not path.is_file():
                continue
            # Unfiltered watches make no initial callback, so the first
            # tick's baseline observation is skipped below
            result = self._registry.try_watch(path, self._make_callback(path))
            if not result.ok:
                _log.warning("Cannot watch config file %s: %s", path, result.error)
            elif result.created:
                self._watched.append(path)
            else:
                _log.warning("Config file %s is already watched, not reloading on change", path)

        self._running = True
        _log.debug("Config watcher started for %d file(s)", len(self._watched))

    def stop(self) -> None:
        """Stop watching for config changes."""
        if not self._running:
            return
        self._running = False
        if self._registry is not None:
            for path in self._watched:
                self._registry.unwatch(path)
            if self._owns_registry:
                self._registry = None
        self._watched.clear()
        _log.debug("Config watcher stopped")

    def _make_callback(self, path: Path) -> WatchCallback:
        baseline = True

        def on_change(changed: Path) -> None:
            nonlocal baseline
            if baseline:
                baseline = False
                return
            _log.info("Config changed: %s", changed)
            try:
                reload_config(project_root=self._project_root)
            except Exception as e:
                _log.error("Error reloading config: %s", e)

        return on_change

    def __enter__(self) -> ConfigWatcher:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


# Global watcher instance
_global_watcher: ConfigWatcher | None = None


def start_watching(
    project_root: str | Path | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ConfigWatcher:
    """Start the global config watcher, replacing any previous one."""
    global _global_watcher

    if _global_watcher is not None:
        _global_watcher.stop()

    _global_watcher = ConfigWatcher(project_root=project_root, poll_interval=poll_interval)
    _global_watcher.start()
    return _global_watcher


def stop_watching() -> None:
    """Stop the global config watcher."""
    global _global_watcher

    if _global_watcher is not None:
        _global_watcher.stop()
        _global_watcher = None
