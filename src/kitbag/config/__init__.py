"""Configuration package for kitbag.

Provides the `merge_config` deep-merge combinator and the TOML-based
settings it is used for: layered discovery and merging of user-level and
project-level files.
"""

from kitbag.config.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    DuplicateConfigError,
)
from kitbag.config.loader import (
    discover_project_config,
    discover_user_config,
    get_config_home,
    load_all_configs,
    load_config_file,
)
from kitbag.config.merge import (
    MERGE_STRATEGIES,
    MergeOptions,
    MergeStrategy,
    merge_config,
)
from kitbag.config.settings import (
    KitbagSettings,
    clear_config_context,
    set_config_context,
)
from kitbag.config.sources import KitbagTomlSettingsSource

__all__ = [
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "DuplicateConfigError",
    # Discovery (loader)
    "discover_project_config",
    "discover_user_config",
    "get_config_home",
    "load_all_configs",
    "load_config_file",
    # Merging
    "MERGE_STRATEGIES",
    "MergeOptions",
    "MergeStrategy",
    "merge_config",
    # Settings
    "KitbagSettings",
    "set_config_context",
    "clear_config_context",
    # Sources
    "KitbagTomlSettingsSource",
]
