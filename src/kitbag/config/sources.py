"""Custom pydantic-settings source for kitbag's TOML configuration.

Plugs the layered TOML discovery of `kitbag.config.loader` into
`settings_customise_sources()`, so environment variables and init kwargs
keep their usual precedence over file values.
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic_settings.sources import InitSettingsSource

from .loader import load_all_configs


class KitbagTomlSettingsSource(InitSettingsSource):
    """Settings source backed by kitbag's TOML config hierarchy.

    Priority order (lowest to highest):
    1. User config (~/.config/kitbag/config.toml)
    2. Project base config (kitbag.toml or .kitbag/config.toml)
    3. Project local config (kitbag.local.toml or .kitbag/config.local.toml)

    When explicit_config is provided, ONLY that file is used (no discovery).
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        project_dir: Path,
        explicit_config: Path | None = None,
    ) -> None:
        """Initialize the TOML settings source.

        Args:
            settings_cls: The pydantic-settings class.
            project_dir: The project directory for config discovery.
            explicit_config: Explicit config file path (--config option).
                If provided, only this file is used.
        """
        self.project_dir = project_dir
        self.explicit_config = explicit_config

        toml_data, self.loaded_files = load_all_configs(project_dir, explicit_config)
        super().__init__(settings_cls, toml_data)
