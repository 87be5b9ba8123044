"""Configuration management for pollwatch.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/pollwatch/ or %PROGRAMDATA%)
- User-level config (~/.config/pollwatch/, ~/.pollwatch/ or %APPDATA%)
- Project-level config ($project_root/.pollwatch/)
- Environment variable overrides (highest priority)

Example usage:
    from pollwatch.config import load_config, get_config

    config = load_config(project_root="/path/to/project")
    print(config.watch.poll_interval)

    # Reload config whenever one of its files changes
    from pollwatch.config import start_watching
    start_watching(project_root="/path/to/project")
"""

from pollwatch.config.loader import (
    get_config,
    load_config,
    on_config_reload,
    reload_config,
    reset_config,
)
from pollwatch.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from pollwatch.config.schema import Config, LoggingConfig, WatchConfig
from pollwatch.config.watcher import ConfigWatcher, start_watching, stop_watching

__all__ = [
    # Main API
    "Config",
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    "on_config_reload",
    # Schema types
    "WatchConfig",
    "LoggingConfig",
    # Path utilities
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
    # Watcher
    "ConfigWatcher",
    "start_watching",
    "stop_watching",
]
