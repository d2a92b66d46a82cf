"""Configuration models and loading for wg-keepalive."""

from wg_keepalive.config.app import (
    DEFAULT_CONFIG_DIR,
    apply_cli_overrides,
    find_config_file,
    get_config_dir,
    load_config,
    load_file,
    load_ini,
    load_yaml,
)
from wg_keepalive.config.keepalive import DEFAULT_RESTART_COMMAND, MonitorConfig
from wg_keepalive.config.logging import LoggingSettings

__all__ = [
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_RESTART_COMMAND",
    "LoggingSettings",
    "MonitorConfig",
    "apply_cli_overrides",
    "find_config_file",
    "get_config_dir",
    "load_config",
    "load_file",
    "load_ini",
    "load_yaml",
]
