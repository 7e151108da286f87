"""Pytest fixtures for kitbag tests."""

from pathlib import Path

import pytest

from kitbag.config import clear_config_context


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def mock_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a mock home directory and set HOME env var."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove kitbag-related environment variables."""
    env_vars = [
        "KITBAG_CONFIG_HOME",
        "XDG_CONFIG_HOME",
        "KITBAG_LOCALE",
        "KITBAG_NUMBER_SEPARATOR",
        "KITBAG_SLUG_JOINER",
        "KITBAG_LOG_LEVEL",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None
) -> Path:
    """Provide a mock KITBAG_CONFIG_HOME directory.

    Depends on clean_env to ensure env is clean before setting KITBAG_CONFIG_HOME.
    """
    config = tmp_path / "kitbag-config"
    config.mkdir()
    monkeypatch.setenv("KITBAG_CONFIG_HOME", str(config))
    return config


@pytest.fixture
def reset_context() -> None:
    """Clear config context before and after a test."""
    clear_config_context()
    yield
    clear_config_context()
