"""Shared pytest fixtures."""

import pytest

API_KEY_VARS = (
    "OHMAN_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "OPENROUTER_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point config and session history at a per-test directory."""
    config_dir = tmp_path / "ohman-config"
    monkeypatch.setenv("OHMAN_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("OHMAN_CONFIG", str(config_dir / "config.json"))
    for var in API_KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    return config_dir
