"""Tests for settings.json handling and directory resolution."""

import json

import pytest

from incometrack.sdk import config


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    monkeypatch.setenv("INCOME_TRACK_CONFIG_PATH", str(path))
    return path


class TestDirectories:

    def test_env_override(self, config_dir):
        assert config.get_config_dir() == config_dir
        assert config.get_settings_path() == config_dir / "settings.json"

    def test_xdg_fallbacks(self, tmp_path, monkeypatch):
        monkeypatch.delenv("INCOME_TRACK_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))

        assert config.get_config_dir() == tmp_path / "cfg" / "income-track"
        assert config.get_default_data_path() == tmp_path / "share" / "income-track"

    def test_data_dir_setting_wins_and_is_created(self, config_dir, tmp_path):
        target = tmp_path / "my-data"
        config.set_setting("data_dir", str(target))

        assert config.get_data_path() == target
        assert target.is_dir()


class TestSettingsFile:

    def test_missing_file_is_empty(self, config_dir):
        assert config.load_settings() == {}
        assert config.get_setting("data_dir", "fallback") == "fallback"

    def test_set_keeps_other_keys(self, config_dir):
        config.save_settings({"other": 1})

        config.set_setting("data_dir", "/tmp/x")

        assert json.loads((config_dir / "settings.json").read_text()) == {"other": 1, "data_dir": "/tmp/x"}

    def test_clear_setting(self, config_dir):
        config.set_setting("data_dir", "/tmp/x")

        assert config.clear_setting("data_dir") is True
        assert config.clear_setting("data_dir") is False
        assert config.load_settings() == {}

    def test_malformed_json_propagates(self, config_dir):
        config_dir.mkdir()
        (config_dir / "settings.json").write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            config.load_settings()
