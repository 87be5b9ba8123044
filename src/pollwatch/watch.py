"""A single polled watch.

Each Watch owns one background thread that checks modification times at a
fixed interval. A watch either tracks one path, or scans a directory for
entries matching a single-wildcard filter and reports the filter path when
any of them changes.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pollwatch.config.schema import DEFAULT_POLL_INTERVAL
from pollwatch.dispatch import Dispatcher, call_directly
from pollwatch.fs import FileSystem, LocalFileSystem
from pollwatch.logging import TRACE, get_logger
from pollwatch.matcher import WildcardMatcher
from pollwatch.tracker import ModificationTracker

log = get_logger("watch")

WatchCallback = Callable[[Path], None]


class WatchState(Enum):
    """Lifecycle of a watch. STOPPED is terminal."""

    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class Watch:
    """Polls one path, or one filtered directory, on its own thread.

    Example:
        watch = Watch("shaders/*.frag", Path("shaders"), "*.frag", reload)
        watch.start()   # calls reload(Path("shaders/*.frag")) once
        ...
        watch.stop()    # blocks until the polling thread has exited
    """

    def __init__(
        self,
        key: str,
        directory: Path,
        filter: str,
        callback: WatchCallback,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        dispatcher: Dispatcher | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize a watch without starting it.

        Args:
            key: The path string the watch was registered under.
            directory: Path to poll (the watched file itself when filter is empty).
            filter: Wildcard pattern for entries of directory, or "".
            callback: Called with the changed path, or with directory/filter.
            poll_interval: Seconds between polling ticks.
            dispatcher: Chooses the thread callbacks run on.
            filesystem: Filesystem collaborator, LocalFileSystem by default.
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval!r}")

        self.key = key
        self.directory = directory
        self.filter = filter
        self.callback = callback
        self.poll_interval = poll_interval

        self._dispatcher = dispatcher or call_directly
        self._fs = filesystem or LocalFileSystem()
        self._matcher = WildcardMatcher(filter) if filter else None
        self._tracker = ModificationTracker(self._fs)

        self._state = WatchState.CREATED
        self._lifecycle_lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        self._start_time: datetime | None = None
        self._callback_count = 0
        self._tick_count = 0

    @property
    def state(self) -> WatchState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is WatchState.RUNNING

    @property
    def filter_path(self) -> Path:
        """Path reported to the callback for filtered watches."""
        return self.directory / self.filter

    @property
    def tracker(self) -> ModificationTracker:
        return self._tracker

    def start(self) -> None:
        """Seed the baseline and start polling.

        A filtered watch records the timestamp of every matching entry and
        then calls back once with the filter path. An unfiltered watch makes
        no initial call; its first tick reports the path as changed.
        """
        with self._lifecycle_lock:
            if self._state is not WatchState.CREATED:
                return
            self._state = WatchState.RUNNING
            self._start_time = datetime.now()

            if self._matcher is not None:
                try:
                    entries = self._matching_entries()
                except OSError as e:
                    log.warning("Error scanning %s: %s", self.directory, e)
                    entries = []
                for entry in entries:
                    try:
                        self._tracker.has_changed(entry)
                    except OSError:
                        continue
                self._dispatch(self.filter_path)

            # The initial callback may have stopped this watch
            if self._stop_event.is_set():
                return

            self._thread = threading.Thread(
                target=self._run,
                name=f"pollwatch:{self.key}",
                daemon=True,
            )
            self._thread.start()

        log.debug("Started watch %s (interval=%.2fs)", self.key, self.poll_interval)

    def stop(self) -> None:
        """Stop polling and wait for the polling thread to exit.

        Once this returns no callback of this watch will run, including ones
        already handed to a dispatcher. Safe to call more than once, and
        from inside the watch's own callback.
        """
        with self._lifecycle_lock:
            if self._state is WatchState.STOPPED:
                return
            self._state = WatchState.STOPPED
            self._stop_event.set()
            thread = self._thread

        if thread is not None and thread is not threading.current_thread():
            thread.join()

        log.debug("Stopped watch %s", self.key)

    def poll(self) -> bool:
        """Run one tick on the calling thread.

        Returns:
            True if a change was detected and the callback dispatched.
        """
        if self._matcher is None:
            changed = self._tracker.has_changed(self.directory)
            if changed:
                self._dispatch(self.directory)
            return changed

        for entry in self._matching_entries():
            try:
                changed = self._tracker.has_changed(entry)
            except OSError as e:
                # Removed between listing and stat, or unreadable
                log.log(TRACE, "Watch %s: skipping %s: %s", self.key, entry, e)
                continue
            if changed:
                log.log(TRACE, "Watch %s: %s changed", self.key, entry)
                self._dispatch(self.filter_path)
                return True
        return False

    def get_status(self) -> dict[str, Any]:
        """Snapshot of the watch's state."""
        return {
            "key": self.key,
            "directory": str(self.directory),
            "filter": self.filter or None,
            "state": self._state.value,
            "poll_interval": self.poll_interval,
            "tracked_paths": len(self._tracker),
            "ticks": self._tick_count,
            "callbacks": self._callback_count,
            "start_time": self._start_time,
            "thread_alive": self._thread is not None and self._thread.is_alive(),
        }

    def _matching_entries(self) -> list[Path]:
        if self._matcher is None:
            return []
        return [
            entry
            for entry in self._fs.list_directory(self.directory)
            if self._matcher(entry.name)
        ]

    def _run(self) -> None:
        """Polling loop; exits only when the stop event is set."""
        while not self._stop_event.is_set():
            started = time.monotonic()
            try:
                self.poll()
            except FileNotFoundError:
                log.log(TRACE, "Watch %s: %s is missing", self.key, self.directory)
            except OSError as e:
                log.warning("Error polling %s: %s", self.key, e)
            except Exception as e:
                log.error("Unexpected error polling %s: %s", self.key, e, exc_info=True)
            self._tick_count += 1
            log.log(
                TRACE,
                "Watch %s tick %d took %.4fs",
                self.key,
                self._tick_count,
                time.monotonic() - started,
            )

            if self._stop_event.wait(self.poll_interval):
                break

    def _dispatch(self, path: Path) -> None:
        if self._stop_event.is_set():
            return
        self._dispatcher(self._invoke, path)

    def _invoke(self, path: Path) -> None:
        """Run the user callback unless the watch has been stopped."""
        if self._stop_event.is_set():
            return
        self._callback_count += 1
        try:
            self.callback(path)
        except Exception as e:
            log.error("Error in watch callback for %s: %s", self.key, e, exc_info=True)

    def __repr__(self) -> str:
        target = self.filter_path if self.filter else self.directory
        return f"<Watch {target} {self._state.value}>"
