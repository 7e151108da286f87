"""Exceptions raised while locating and reading kitbag config files."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class DuplicateConfigError(ConfigError):
    """Raised when two config files compete for the same layer.

    For example, if both `kitbag.toml` and `.kitbag/config.toml` exist in
    the same project directory.
    """

    def __init__(self, files: list[str]) -> None:
        self.files = files
        super().__init__(
            f"Conflicting config files found: {', '.join(files)}. "
            "Keep only one of them."
        )


class ConfigFileNotFoundError(ConfigError):
    """Raised when a config file passed by path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigParseError(ConfigError):
    """Raised when a config file is not valid TOML or JSON, or not a table."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read config file {path}: {reason}")
