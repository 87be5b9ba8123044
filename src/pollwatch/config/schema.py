"""Configuration schema dataclasses for pollwatch.

Defines the structure of configuration at all levels (system, user, project).
All fields have defaults so partial configs merge together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_POLL_INTERVAL = 0.5


@dataclass
class WatchConfig:
    """Polling configuration.

    Example config.yaml:
        watch:
          poll_interval: 0.25
    """

    poll_interval: float = DEFAULT_POLL_INTERVAL  # Seconds between ticks of each watch


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # TRACE, DEBUG, VERBOSE, INFO, WARNING, ERROR
    verbose: int | None = None  # 0..4, takes precedence over level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections, kept for applications embedding pollwatch
    extra: dict[str, Any] = field(default_factory=dict)
