"""Tests for config/loader.py file discovery and loading."""

from pathlib import Path

import pytest

from kitbag.config import (
    ConfigFileNotFoundError,
    ConfigParseError,
    DuplicateConfigError,
    discover_project_config,
    discover_user_config,
    get_config_home,
    load_all_configs,
    load_config_file,
)


class TestGetConfigHome:
    """Tests for get_config_home function."""

    def test_kitbag_config_home_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """KITBAG_CONFIG_HOME takes precedence."""
        monkeypatch.setenv("KITBAG_CONFIG_HOME", "/custom/kitbag/config")
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
        assert get_config_home() == Path("/custom/kitbag/config")

    def test_xdg_config_home_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_CONFIG_HOME/kitbag is used when KITBAG_CONFIG_HOME not set."""
        monkeypatch.delenv("KITBAG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
        assert get_config_home() == Path("/xdg/config/kitbag")

    def test_default_fallback(
        self, monkeypatch: pytest.MonkeyPatch, mock_home: Path
    ) -> None:
        """Falls back to ~/.config/kitbag when no env vars set."""
        monkeypatch.delenv("KITBAG_CONFIG_HOME", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_home() == mock_home / ".config" / "kitbag"


class TestDiscoverUserConfig:
    """Tests for discover_user_config function."""

    def test_returns_path_when_exists(self, config_home: Path) -> None:
        config_file = config_home / "config.toml"
        config_file.write_text('locale = "en"')
        assert discover_user_config() == config_file

    def test_returns_none_when_missing(self, config_home: Path) -> None:
        assert discover_user_config() is None

    def test_returns_none_when_directory(self, config_home: Path) -> None:
        (config_home / "config.toml").mkdir()
        assert discover_user_config() is None


class TestDiscoverProjectConfig:
    """Tests for discover_project_config function."""

    def test_no_config_files(self, project_dir: Path) -> None:
        assert discover_project_config(project_dir) == (None, None)

    def test_kitbag_toml_only(self, project_dir: Path) -> None:
        config = project_dir / "kitbag.toml"
        config.write_text('locale = "en"')
        assert discover_project_config(project_dir) == (config, None)

    def test_dot_kitbag_config_only(self, project_dir: Path) -> None:
        dot_dir = project_dir / ".kitbag"
        dot_dir.mkdir()
        config = dot_dir / "config.toml"
        config.write_text('locale = "en"')
        assert discover_project_config(project_dir) == (config, None)

    def test_duplicate_base_config_error(self, project_dir: Path) -> None:
        """Raises error when both base config formats exist."""
        (project_dir / "kitbag.toml").write_text("a = 1")
        dot_dir = project_dir / ".kitbag"
        dot_dir.mkdir()
        (dot_dir / "config.toml").write_text("b = 2")

        with pytest.raises(DuplicateConfigError) as exc_info:
            discover_project_config(project_dir)

        assert "kitbag.toml" in str(exc_info.value)
        assert ".kitbag/config.toml" in str(exc_info.value)
        assert len(exc_info.value.files) == 2

    def test_duplicate_local_config_error(self, project_dir: Path) -> None:
        """Raises error when both local config formats exist."""
        (project_dir / "kitbag.local.toml").write_text("a = 1")
        dot_dir = project_dir / ".kitbag"
        dot_dir.mkdir()
        (dot_dir / "config.local.toml").write_text("b = 2")

        with pytest.raises(DuplicateConfigError) as exc_info:
            discover_project_config(project_dir)

        assert "kitbag.local.toml" in str(exc_info.value)

    def test_mixed_formats_allowed(self, project_dir: Path) -> None:
        """Different formats for base and local are allowed."""
        base = project_dir / "kitbag.toml"
        base.write_text('locale = "en"')
        dot_dir = project_dir / ".kitbag"
        dot_dir.mkdir()
        local = dot_dir / "config.local.toml"
        local.write_text('slug_joiner = "_"')

        assert discover_project_config(project_dir) == (base, local)


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text("""
locale = "en"

[theme.colors]
primary = "red"
""")
        assert load_config_file(config) == {
            "locale": "en",
            "theme": {"colors": {"primary": "red"}},
        }

    def test_loads_valid_json(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text('{"locale": "fa", "tags": ["a", "b"]}')
        assert load_config_file(config) == {"locale": "fa", "tags": ["a", "b"]}

    def test_file_not_found_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.toml"
        with pytest.raises(ConfigFileNotFoundError) as exc_info:
            load_config_file(missing)
        assert str(missing) in str(exc_info.value)

    def test_invalid_toml_error(self, tmp_path: Path) -> None:
        invalid = tmp_path / "invalid.toml"
        invalid.write_text("this is not valid toml [")
        with pytest.raises(ConfigParseError) as exc_info:
            load_config_file(invalid)
        assert exc_info.value.path == str(invalid)

    def test_invalid_json_error(self, tmp_path: Path) -> None:
        invalid = tmp_path / "invalid.json"
        invalid.write_text("{not json")
        with pytest.raises(ConfigParseError):
            load_config_file(invalid)

    @pytest.mark.parametrize(
        ("name", "payload"),
        [("bad.json", b'{"a": "\xff"}'), ("bad.toml", b'a = "\xff"')],
    )
    def test_non_utf8_file_error(self, tmp_path: Path, name: str, payload: bytes) -> None:
        """Bytes that are not UTF-8 are reported as a parse error."""
        config = tmp_path / name
        config.write_bytes(payload)
        with pytest.raises(ConfigParseError) as exc_info:
            load_config_file(config)
        assert exc_info.value.path == str(config)

    def test_json_top_level_must_be_object(self, tmp_path: Path) -> None:
        config = tmp_path / "list.json"
        config.write_text("[1, 2]")
        with pytest.raises(ConfigParseError, match="top level"):
            load_config_file(config)


class TestLoadAllConfigs:
    """Tests for load_all_configs function."""

    def test_no_configs_returns_empty(
        self, project_dir: Path, config_home: Path
    ) -> None:
        config, files = load_all_configs(project_dir)
        assert config == {}
        assert files == []

    def test_merge_priority_order(self, project_dir: Path, config_home: Path) -> None:
        """Later configs override earlier ones."""
        user_config = config_home / "config.toml"
        user_config.write_text("""
locale = "en"
number_separator = "."
slug_joiner = "_"
""")

        proj_config = project_dir / "kitbag.toml"
        proj_config.write_text("""
locale = "fa"
number_separator = " "
""")

        local_config = project_dir / "kitbag.local.toml"
        local_config.write_text('locale = "en"')

        config, files = load_all_configs(project_dir)

        assert config["locale"] == "en"
        assert config["number_separator"] == " "
        assert config["slug_joiner"] == "_"
        assert files == [user_config, proj_config, local_config]

    def test_explicit_config_only_mode(
        self, project_dir: Path, config_home: Path, tmp_path: Path
    ) -> None:
        """Explicit config ignores all discovery."""
        (config_home / "config.toml").write_text('locale = "fa"')
        (project_dir / "kitbag.toml").write_text('locale = "fa"')

        explicit = tmp_path / "explicit.toml"
        explicit.write_text('locale = "en"')

        config, files = load_all_configs(project_dir, explicit_config=explicit)
        assert config == {"locale": "en"}
        assert files == [explicit]

    def test_explicit_config_not_found(
        self, project_dir: Path, tmp_path: Path, config_home: Path
    ) -> None:
        with pytest.raises(ConfigFileNotFoundError):
            load_all_configs(project_dir, explicit_config=tmp_path / "missing.toml")

    def test_nested_tables_merge(self, project_dir: Path, config_home: Path) -> None:
        """Nested tables are merged recursively."""
        (config_home / "config.toml").write_text("""
[theme.colors]
primary = "red"
secondary = "blue"
""")
        (project_dir / "kitbag.toml").write_text("""
[theme.colors]
primary = "green"
""")

        config, _ = load_all_configs(project_dir)
        assert config["theme"] == {"colors": {"primary": "green", "secondary": "blue"}}

    def test_list_replacement(self, project_dir: Path, config_home: Path) -> None:
        """Arrays are replaced entirely (not concatenated)."""
        (config_home / "config.toml").write_text('plugins = ["slug", "number"]')
        (project_dir / "kitbag.toml").write_text('plugins = ["dates"]')

        config, _ = load_all_configs(project_dir)
        assert config["plugins"] == ["dates"]

    def test_strategies_apply_to_layers(
        self, project_dir: Path, config_home: Path
    ) -> None:
        """A replace strategy swaps whole tables between layers."""
        (config_home / "config.toml").write_text("""
[theme.colors]
primary = "red"
secondary = "blue"
""")
        (project_dir / "kitbag.toml").write_text("""
[theme.colors]
primary = "green"
""")

        config, _ = load_all_configs(project_dir, strategies={"theme.colors": "replace"})
        assert config["theme"] == {"colors": {"primary": "green"}}
