"""Configuration file discovery and loading.

Discovers TOML configuration files at the user and project levels and
merges them with `merge_config`, later layers winning.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from kitbag.config.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    DuplicateConfigError,
)
from kitbag.config.merge import MergeOptions, merge_config

logger = logging.getLogger(__name__)

APP_NAME = "kitbag"


def get_config_home() -> Path:
    """Get the kitbag config home directory.

    Priority:
    1. $KITBAG_CONFIG_HOME if set
    2. $XDG_CONFIG_HOME/kitbag if XDG_CONFIG_HOME is set
    3. ~/.config/kitbag (default)
    """
    if config_home := os.environ.get("KITBAG_CONFIG_HOME"):
        return Path(config_home)

    if xdg_config_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config_home) / APP_NAME

    return Path.home() / ".config" / APP_NAME


def discover_user_config() -> Path | None:
    """Return the user-level config.toml if it exists."""
    config_file = get_config_home() / "config.toml"
    if config_file.is_file():
        return config_file
    return None


def _pick_one(first: Path, second: Path) -> Path | None:
    """Return whichever of two equivalent config locations exists.

    Raises:
        DuplicateConfigError: If both exist.
    """
    if first.is_file() and second.is_file():
        raise DuplicateConfigError([str(first), str(second)])
    if first.is_file():
        return first
    if second.is_file():
        return second
    return None


def discover_project_config(project_dir: Path) -> tuple[Path | None, Path | None]:
    """Discover project-level configuration files.

    Looks for:
    - Base config: kitbag.toml OR .kitbag/config.toml (mutually exclusive)
    - Local config: kitbag.local.toml OR .kitbag/config.local.toml (mutually exclusive)

    Args:
        project_dir: The project directory to search in.

    Returns:
        Tuple of (base_config_path, local_config_path). Either may be None.

    Raises:
        DuplicateConfigError: If both formats exist at the same level.
    """
    dot_dir = project_dir / f".{APP_NAME}"
    base_config = _pick_one(project_dir / f"{APP_NAME}.toml", dot_dir / "config.toml")
    local_config = _pick_one(
        project_dir / f"{APP_NAME}.local.toml", dot_dir / "config.local.toml"
    )
    return base_config, local_config


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a TOML or JSON file (chosen by suffix) into a dict.

    Files without a `.json` suffix are read as TOML.

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist.
        ConfigParseError: If the file is malformed or its top level is not
            a table/object.
    """
    if not path.is_file():
        raise ConfigFileNotFoundError(str(path))

    try:
        if path.suffix.lower() == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigParseError(str(path), "top level must be a table")

    logger.debug("Loaded config file %s", path)
    return data


def load_all_configs(
    project_dir: Path,
    explicit_config: Path | None = None,
    strategies: MergeOptions | None = None,
) -> tuple[dict[str, Any], list[Path]]:
    """Load and merge all configuration files.

    When explicit_config is provided, ONLY that file is loaded (no merging).
    Otherwise, files are discovered and merged in priority order:
    1. User config (lowest)
    2. Project base config
    3. Project local config (highest)

    Args:
        project_dir: The project directory.
        explicit_config: Explicit config file path (--config option).
        strategies: Merge strategies applied at every layer.

    Returns:
        Tuple of (merged_config_dict, list_of_loaded_files).

    Raises:
        ConfigFileNotFoundError: If explicit_config is provided but doesn't exist.
        DuplicateConfigError: If conflicting config files exist.
        ConfigParseError: If a file cannot be parsed.
    """
    if explicit_config is not None:
        return load_config_file(explicit_config), [explicit_config]

    layers = [discover_user_config(), *discover_project_config(project_dir)]

    merged: dict[str, Any] = {}
    loaded_files: list[Path] = []
    for path in layers:
        if path is None:
            continue
        merged = merge_config(merged, load_config_file(path), strategies)
        loaded_files.append(path)

    logger.debug("Merged %d config file(s) for %s", len(loaded_files), project_dir)
    return merged, loaded_files
