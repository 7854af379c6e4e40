"""Unit tests for ohman.config."""

import json
import os
import stat

import pytest

from ohman.config import config_dir, config_path, load_config, needs_setup, save_config
from ohman.errors import ConfigError
from ohman.models import OhmanConfig


class TestPaths:
    def test_env_overrides(self, isolated_config):
        assert config_dir() == isolated_config
        assert config_path() == isolated_config / "config.json"

    def test_config_path_defaults_into_config_dir(self, monkeypatch, isolated_config):
        monkeypatch.delenv("OHMAN_CONFIG")
        assert config_path() == isolated_config / "config.json"


class TestLoadConfig:
    def test_defaults_when_missing(self):
        config = load_config()
        assert config.llm.provider == "openai"
        assert config.llm.model == "gpt-4o-mini"
        assert config.llm.api_key is None
        assert config.output.language == "en-US"

    def test_reads_json(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text(
            json.dumps({"llm": {"provider": "anthropic", "model": "claude-3-haiku", "api_key": "k"}})
        )
        config = load_config()
        assert config.llm.provider == "anthropic"
        assert config.llm.api_key == "k"
        assert config.llm.max_tokens == 4096

    def test_invalid_json(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text("{not json")
        with pytest.raises(ConfigError, match="failed to read config file"):
            load_config()

    def test_invalid_values(self, isolated_config):
        isolated_config.mkdir()
        (isolated_config / "config.json").write_text(json.dumps({"llm": {"max_tokens": "many"}}))
        with pytest.raises(ConfigError, match="failed to parse config file"):
            load_config()

    def test_ohman_api_key_overrides_stored_key(self, monkeypatch):
        save_config(OhmanConfig.model_validate({"llm": {"api_key": "stored"}}))
        monkeypatch.setenv("OHMAN_API_KEY", "from-env")
        assert load_config().llm.api_key == "from-env"

    def test_provider_env_key_fills_missing_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        assert load_config().llm.api_key == "sk-openai"

    def test_apply_env_off(self, monkeypatch):
        monkeypatch.setenv("OHMAN_API_KEY", "from-env")
        assert load_config(apply_env=False).llm.api_key is None


class TestSaveConfig:
    def test_round_trip_and_permissions(self, isolated_config):
        config = OhmanConfig()
        config.llm.model = "gpt-4o"
        path = save_config(config)

        assert path == isolated_config / "config.json"
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        assert load_config().llm.model == "gpt-4o"


class TestNeedsSetup:
    def test_true_without_file_or_key(self):
        assert needs_setup() is True

    def test_false_with_env_key(self, monkeypatch):
        monkeypatch.setenv("OHMAN_API_KEY", "k")
        assert needs_setup() is False

    def test_false_with_config_file(self):
        save_config(OhmanConfig())
        assert needs_setup() is False


class TestExplicitPath:
    def test_explicit_path_wins_over_env(self, tmp_path, isolated_config):
        path = tmp_path / "elsewhere.json"
        assert config_path(path) == path

    def test_save_and_load_explicit_path(self, tmp_path, isolated_config):
        path = tmp_path / "elsewhere.json"
        config = OhmanConfig()
        config.llm.model = "explicit-model"
        assert save_config(config, path) == path

        assert load_config(path).llm.model == "explicit-model"
        assert needs_setup(path) is False
        assert not (isolated_config / "config.json").exists()
