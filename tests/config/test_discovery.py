"""Tests for config file discovery."""

from pathlib import Path

import pytest

from dqcatalog.config.discovery import CONFIG_FILENAME, find_config, resolve_config


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[catalog]\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[catalog]\n")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[catalog]\n")
        monkeypatch.setenv("DQCAT_CONFIG", str(config_file))
        assert find_config(tmp_path / "anywhere") == config_file

    def test_env_var_pointing_nowhere(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[catalog]\n")
        monkeypatch.setenv("DQCAT_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestResolveConfig:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[catalog]\n")
        custom = tmp_path / "custom.toml"
        custom.write_text("[derive]\n")
        monkeypatch.setenv("DQCAT_CONFIG", str(tmp_path / CONFIG_FILENAME))
        assert resolve_config(str(custom), tmp_path) == custom

    def test_missing_explicit_path_skips_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[catalog]\n")
        assert resolve_config(tmp_path / "absent.toml", tmp_path) is None

    def test_falls_back_to_walk_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[catalog]\n")
        child = tmp_path / "nested"
        child.mkdir()
        assert resolve_config(None, child) == config_file
