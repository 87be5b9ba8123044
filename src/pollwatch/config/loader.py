"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Merging system, user and project files
- Environment variable overrides
- Config caching with reload support
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from pollwatch.config.paths import get_config_paths
from pollwatch.config.schema import DEFAULT_POLL_INTERVAL, Config, LoggingConfig, WatchConfig

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("pollwatch.config")

_cached_config: Config | None = None

_reload_callbacks: list[Callable[[Config], None]] = []


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Nested dicts merge recursively, lists and scalars are replaced, and None
    in override never replaces a value.
    """
    result = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables.

    PW_LOG sets logging.file and PW_POLL_INTERVAL sets watch.poll_interval.
    """
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("PW_LOG")
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    interval = os.environ.get("PW_POLL_INTERVAL")
    if interval:
        overrides.setdefault("watch", {})["poll_interval"] = interval

    return overrides


def _parse_poll_interval(value: Any) -> float:
    if value is None:
        return DEFAULT_POLL_INTERVAL
    try:
        interval = float(value)
    except (TypeError, ValueError):
        _log.warning("Invalid watch.poll_interval %r, using %s", value, DEFAULT_POLL_INTERVAL)
        return DEFAULT_POLL_INTERVAL
    if interval <= 0:
        _log.warning("watch.poll_interval must be positive, using %s", DEFAULT_POLL_INTERVAL)
        return DEFAULT_POLL_INTERVAL
    return interval


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass."""
    watch_data = data.get("watch") or {}
    watch = WatchConfig(
        poll_interval=_parse_poll_interval(watch_data.get("poll_interval")),
    )

    log_data = data.get("logging") or {}
    verbose = log_data.get("verbose")
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=verbose if isinstance(verbose, int) else None,
        file=log_data.get("file"),
    )

    known_keys = {"watch", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(watch=watch, logging=logging_config, extra=extra)


def load_config(project_root: str | Path | None = None, reload: bool = False) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Project config ($project_root/.pollwatch/config.yaml)
    3. User config
    4. System config

    Args:
        project_root: Project directory for project-level config.
        reload: Force reload even if cached.

    Returns:
        Merged Config object.
    """
    global _cached_config

    if _cached_config is not None and not reload and project_root is None:
        return _cached_config

    merged: dict[str, Any] = {}
    for path in get_config_paths(project_root):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            merged = deep_merge(merged, config_data)

    merged = deep_merge(merged, env_overrides())
    config = dict_to_config(merged)

    # Cache only global config (no project_root)
    if project_root is None:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it if needed."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config."""
    global _cached_config
    _cached_config = None


def reload_config(project_root: str | Path | None = None) -> Config:
    """Reload config from files and notify callbacks."""
    config = load_config(project_root=project_root, reload=True)

    for callback in list(_reload_callbacks):
        try:
            callback(config)
        except Exception as e:
            _log.warning("Config reload callback error: %s", e)

    return config


def on_config_reload(callback: Callable[[Config], None]) -> Callable[[], None]:
    """Register a callback to be called when config is reloaded.

    Returns:
        A function to unregister the callback.
    """
    _reload_callbacks.append(callback)

    def unregister() -> None:
        if callback in _reload_callbacks:
            _reload_callbacks.remove(callback)

    return unregister
