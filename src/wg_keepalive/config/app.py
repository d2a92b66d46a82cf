"""
Configuration management for wg-keepalive.

Each monitored interface has its own YAML (or JSON) file named after the
interface in the configuration directory. Flat ``key = value`` files with a
``.conf`` extension are read as well. Values are resolved with the
hierarchy CLI > file > defaults, and validated into a MonitorConfig.
"""

from __future__ import annotations

import configparser
import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wg_keepalive.config.keepalive import MonitorConfig

DEFAULT_CONFIG_DIR = "/etc/wg-keepalive"

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")

INI_EXTENSION = ".conf"

# Keys of a .conf file live outside any section.
INI_ROOT_SECTION = "keepalive"


def get_config_dir() -> Path:
    """Get the configuration directory, respecting WG_KEEPALIVE_CONFIG_DIR env var."""
    config_dir = os.environ.get("WG_KEEPALIVE_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path(DEFAULT_CONFIG_DIR)


def find_config_file(interface: str, config_dir: str | Path) -> Path | None:
    """
    Locate the configuration file for an interface.

    Args:
        interface: WireGuard interface name
        config_dir: Directory holding per-interface config files

    Returns:
        Path of the first existing ``<interface>.yaml``, ``.yml``, ``.json``
        or ``.conf``, or None if the interface has no configuration file.
    """
    base = Path(config_dir).expanduser()
    for ext in (*CONFIG_EXTENSIONS, INI_EXTENSION):
        candidate = base / f"{interface}{ext}"
        if candidate.is_file():
            return candidate
    return None


def load_yaml(config_file: str | Path) -> dict[str, Any]:
    """
    Load YAML or JSON configuration file.

    Args:
        config_file: Path to YAML or JSON configuration file

    Returns:
        Dictionary with parsed YAML/JSON content, empty if the file is missing

    Raises:
        ValueError: If YAML/JSON is invalid or file format is wrong
    """
    config_path = Path(config_file).expanduser()

    if not config_path.exists():
        return {}

    file_ext = config_path.suffix.lower()
    if file_ext not in CONFIG_EXTENSIONS:
        raise ValueError(
            f"Config file must have .yaml, .yml, or .json extension, got: {file_ext}\n"
            f"File: {config_path}"
        )

    try:
        content = config_path.read_text()

        if file_ext == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            data = yaml.safe_load(content)

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def load_ini(config_file: str | Path) -> dict[str, Any]:
    """
    Load a flat ``key = value`` configuration file.

    Only keys before the first ``[section]`` header are used. Surrounding
    quotes are removed from values; ``$`` and ``%`` are kept verbatim so shell
    variables such as ``$WG_INTERFACE`` reach the commands unchanged.

    Args:
        config_file: Path to the .conf file

    Returns:
        Dictionary of raw string values, empty if the file is missing

    Raises:
        ValueError: If the file cannot be parsed
    """
    config_path = Path(config_file).expanduser()

    if not config_path.exists():
        return {}

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_string(
            f"[{INI_ROOT_SECTION}]\n{config_path.read_text()}",
            source=str(config_path),
        )
    except configparser.Error as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    return {key: _unquote(value.strip()) for key, value in parser.items(INI_ROOT_SECTION)}


def load_file(config_file: str | Path) -> dict[str, Any]:
    """Load a configuration file with the loader matching its extension."""
    if Path(config_file).suffix.lower() == INI_EXTENSION:
        return load_ini(config_file)
    return load_yaml(config_file)


def apply_cli_overrides(
    config_dict: dict[str, Any],
    cli_overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Apply CLI argument overrides to config dictionary.

    Options left unset on the command line arrive as None and are skipped.

    Args:
        config_dict: Configuration dictionary
        cli_overrides: Dictionary of CLI overrides

    Returns:
        Configuration dictionary with CLI overrides applied
    """
    if cli_overrides is None:
        return config_dict

    for key, value in cli_overrides.items():
        if value is not None:
            config_dict[key] = value

    return config_dict


def load_config(
    interface: str,
    config_dir: str | Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> MonitorConfig:
    """
    Load configuration with hierarchy: CLI > file > Defaults.

    A missing configuration file is not an error; the interface then runs
    with defaults only.

    Args:
        interface: WireGuard interface name
        config_dir: Directory with per-interface files (default: get_config_dir())
        cli_overrides: Dictionary of CLI argument overrides

    Returns:
        Validated MonitorConfig instance

    Raises:
        ValueError: If the configuration file is unreadable or invalid
    """
    if config_dir is None:
        config_dir = get_config_dir()

    config_file = find_config_file(interface, config_dir)
    config_dict = load_file(config_file) if config_file is not None else {}
    config_dict = apply_cli_overrides(config_dict, cli_overrides)
    config_dict["interface"] = interface

    source = config_file or "defaults"
    try:
        return MonitorConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ValueError(
            f"Configuration validation failed: {e}\n"
            f"Please check your configuration ({source})"
        ) from e
