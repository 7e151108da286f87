"""Settings for kitbag's command line and helper defaults.

Uses Pydantic v2 BaseSettings with custom source ordering for TOML config support.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .sources import KitbagTomlSettingsSource

if TYPE_CHECKING:
    from pydantic_settings.sources import PydanticBaseSettingsSource

# Module-level state for passing context to settings_customise_sources
_project_dir: Path | None = None
_explicit_config: Path | None = None


def set_config_context(project_dir: Path, explicit_config: Path | None = None) -> None:
    """Set context for KitbagSettings instantiation.

    Must be called before creating a KitbagSettings instance so the TOML
    source knows where to look.

    Args:
        project_dir: The project directory for config discovery.
        explicit_config: Explicit config file path (--config option).
    """
    global _project_dir, _explicit_config
    _project_dir = project_dir
    _explicit_config = explicit_config


def clear_config_context() -> None:
    """Clear the config context."""
    global _project_dir, _explicit_config
    _project_dir = None
    _explicit_config = None


class KitbagSettings(BaseSettings):
    """Defaults used by the kitbag command line.

    Settings are loaded from multiple sources with the following priority
    (highest to lowest):
    1. Constructor kwargs (init_settings)
    2. Environment variables with KITBAG_ prefix (env_settings)
    3. TOML config files (merged from user/project/local configs)
    4. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="KITBAG_",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown keys in TOML files
    )

    locale: Literal["en", "fa"] = Field(
        default="fa",
        description="Locale for relative times and durations",
    )

    number_separator: str = Field(
        default=",",
        description="Thousands separator used by format_number",
    )

    slug_joiner: str = Field(
        default="-",
        min_length=1,
        description="String placed between words of a slug",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level for the command line",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: "PydanticBaseSettingsSource",
        env_settings: "PydanticBaseSettingsSource",
        dotenv_settings: "PydanticBaseSettingsSource",
        file_secret_settings: "PydanticBaseSettingsSource",
    ) -> tuple["PydanticBaseSettingsSource", ...]:
        """Customize settings sources and their priority.

        Priority order (first = highest):
        1. init_settings - Constructor kwargs
        2. env_settings - KITBAG_* environment variables
        3. toml_source - Merged TOML config files
        """
        project_dir = _project_dir if _project_dir is not None else Path.cwd()

        toml_source = KitbagTomlSettingsSource(
            settings_cls,
            project_dir=project_dir,
            explicit_config=_explicit_config,
        )

        return (init_settings, env_settings, toml_source)
