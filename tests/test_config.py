"""Tests for configuration loading."""

import json

import pytest

from cachetidy.config import CONFIG_ENV_VAR, CacheTidyConfig, config_path, load_config
from cachetidy.errors import ConfigError


class TestConfigPath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "c.json"))
        assert config_path() == tmp_path / "c.json"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_path().parts[-3:] == (".config", "cachetidy", "config.json")


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.json")

        assert config == CacheTidyConfig()
        assert config.min_size_bytes == 1024**2
        assert config.mode == "select"
        assert config.exclude == []

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "min_size": "10MB",
                    "include_apple": True,
                    "mode": "prompt",
                    "exclude": ["JetBrains"],
                    "unknown_key": 1,
                }
            )
        )

        config = load_config(path)

        assert config.min_size_bytes == 10 * 1024**2
        assert config.include_apple
        assert config.mode == "prompt"
        assert config.exclude == ["JetBrains"]

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            "[1, 2]",
            '{"mode": "shred"}',
            '{"min_size": "huge"}',
            '{"min_size": "infMB"}',
            '{"min_size": "1e400KB"}',
        ],
    )
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)

        with pytest.raises(ConfigError):
            load_config(path)
