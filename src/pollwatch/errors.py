"""Error types raised by pollwatch.

Registration and touch failures surface synchronously to the caller. Errors
that happen inside a polling thread are logged there and never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class WatchError(Exception):
    """Base class for pollwatch errors."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotFoundError(WatchError, FileNotFoundError):
    """A watched path is missing.

    Raised when:
    - watch() is given a path that does not exist
    - a filtered watch's directory does not exist
    - a filtered watch's pattern matches no entry at registration time
    - touch() is given a path that does not exist
    """

    def __init__(self, path: str | Path, reason: str | None = None) -> None:
        message = f"Failed to find file or directory at: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path)


class WatchIOError(WatchError, OSError):
    """A filesystem operation failed for a reason other than a missing path."""


@dataclass
class WatchResult:
    """Outcome of a registration attempt.

    Attributes:
        path: The path that was passed to the registry.
        error: The failure, or None when registration succeeded (or was a no-op).
        created: True if a new watch was started by this call.
    """

    path: str
    error: WatchError | None = None
    created: bool = False

    @property
    def ok(self) -> bool:
        """True if the call did not fail."""
        return self.error is None

    def unwrap(self) -> None:
        """Raise the stored error, if any."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        if self.ok:
            return f"<WatchResult ok, created={self.created}>"
        return f"<WatchResult error={self.error}>"
