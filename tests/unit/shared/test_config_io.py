"""Tests for config I/O utilities."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest

from fgit.domain.config import FgitConfig, IdsConfig
from fgit.shared.config_io import (
    config_to_data,
    create_default_config_file,
    dump_config,
    get_global_config_path,
    get_local_config_path,
    load_config_data,
    save_config,
)


class TestPaths:
    """Tests for config file locations."""

    def test_xdg_config_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        with patch("fgit.shared.config_io.platform.system", return_value="Linux"):
            assert get_global_config_path() == tmp_path / "fgit" / "config.toml"

    def test_home_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        with patch("fgit.shared.config_io.platform.system", return_value="Linux"):
            assert get_global_config_path() == Path.home() / ".config" / "fgit" / "config.toml"

    def test_windows_appdata(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("APPDATA", str(tmp_path))
        with patch("fgit.shared.config_io.platform.system", return_value="Windows"):
            assert get_global_config_path() == tmp_path / "fgit" / "config.toml"

    def test_local_path(self, tmp_path: Path) -> None:
        assert get_local_config_path(tmp_path) == tmp_path / ".fgit.toml"


class TestLoadConfigData:
    """Tests for load_config_data()."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config_data(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("not = [valid")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config_data(path)


class TestWriting:
    """Tests for serializing configs."""

    def test_data_has_all_sections(self) -> None:
        data = config_to_data(FgitConfig.default())
        assert set(data) == {"ids", "editor", "watch", "display"}
        assert data["ids"]["alphabet"] == "dfghklsa"

    def test_dump_reads_back(self) -> None:
        config = FgitConfig(ids=IdsConfig(alphabet="jkl", max_length=3))
        data = tomllib.loads(dump_config(config))
        assert FgitConfig.from_partial(FgitConfig.default(), data) == config

    def test_save_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        save_config(FgitConfig.default(), path)
        assert load_config_data(path)["watch"]["interval"] == 2.0

    def test_default_file_matches_defaults(self, tmp_path: Path) -> None:
        """The commented template parses to the built-in defaults."""
        path = tmp_path / "fgit" / "config.toml"
        create_default_config_file(path)
        text = path.read_text()
        assert "# fgit configuration" in text
        loaded = FgitConfig.from_partial(FgitConfig.default(), load_config_data(path))
        assert loaded == FgitConfig.default()
