"""Callback invocation strategies.

A dispatcher receives ``(invoke, path)`` from a polling thread and decides
where ``invoke(path)`` runs. The default runs it right away on the polling
thread; the others hand it to a thread the application controls.
"""

from __future__ import annotations

import asyncio
import queue
from collections.abc import Callable
from pathlib import Path

from pollwatch.logging import get_logger

log = get_logger("dispatch")

Invoker = Callable[[Path], None]
Dispatcher = Callable[[Invoker, Path], None]


def call_directly(invoke: Invoker, path: Path) -> None:
    """Run the callback on the calling (polling) thread."""
    invoke(path)


class QueueDispatcher:
    """Queues callbacks until the owning thread drains them.

    Intended for applications with their own main loop: poll threads enqueue,
    and the main loop calls drain() once per frame.

    Example:
        dispatcher = QueueDispatcher()
        registry = WatchRegistry(dispatcher=dispatcher)
        registry.watch("shaders/*.frag", reload_shaders)

        while running:
            dispatcher.drain()
            render()
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple[Invoker, Path]] = queue.SimpleQueue()

    def __call__(self, invoke: Invoker, path: Path) -> None:
        self._queue.put((invoke, path))

    @property
    def pending(self) -> int:
        """Approximate number of queued invocations."""
        return self._queue.qsize()

    def drain(self, max_items: int | None = None) -> int:
        """Run queued invocations on the current thread.

        Args:
            max_items: Upper bound on invocations to run, or None for all.

        Returns:
            Number of invocations run.
        """
        count = 0
        while max_items is None or count < max_items:
            try:
                invoke, path = self._queue.get_nowait()
            except queue.Empty:
                break
            invoke(path)
            count += 1
        return count


class AsyncioDispatcher:
    """Schedules callbacks onto an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def __call__(self, invoke: Invoker, path: Path) -> None:
        try:
            self._loop.call_soon_threadsafe(invoke, path)
        except RuntimeError:
            # Loop already closed
            log.debug("Dropping callback for %s: event loop is closed", path)
