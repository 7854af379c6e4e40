"""Configuration loading and persistence for ohman."""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ohman.errors import ConfigError
from ohman.models import OhmanConfig, ProviderInfo

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "ohman"
CONFIG_FILE = CONFIG_DIR / "config.json"

PROVIDERS: dict[str, ProviderInfo] = {
    "openai": {
        "label": "OpenAI (or any OpenAI-compatible API)",
        "env_key": "OPENAI_API_KEY",
        "default_model": "gpt-4o-mini",
    },
    "anthropic": {
        "label": "Anthropic",
        "env_key": "ANTHROPIC_API_KEY",
        "default_model": "claude-3-5-haiku-latest",
    },
    "gemini": {
        "label": "Google Gemini",
        "env_key": "GEMINI_API_KEY",
        "default_model": "gemini-2.0-flash",
    },
    "openrouter": {
        "label": "OpenRouter",
        "env_key": "OPENROUTER_API_KEY",
        "default_model": "openrouter/openai/gpt-4o-mini",
    },
    "ollama": {
        "label": "Ollama (local, no API key)",
        "env_key": None,
        "default_model": "llama3.1",
    },
}


def config_dir() -> Path:
    """Return the directory holding ohman state (config, session history)."""
    override = os.environ.get("OHMAN_CONFIG_DIR", "").strip()
    if override:
        return Path(override)
    return CONFIG_DIR


def config_path(path: str | os.PathLike[str] | None = None) -> Path:
    """Return the config file path: an explicit path, else OHMAN_CONFIG, else the default."""
    if path is not None:
        return Path(path)
    override = os.environ.get("OHMAN_CONFIG", "").strip()
    if override:
        return Path(override)
    return config_dir() / CONFIG_FILE.name


def _env_api_key(provider: str) -> str | None:
    key = os.environ.get("OHMAN_API_KEY")
    if key:
        return key
    env_key = PROVIDERS.get(provider, {}).get("env_key")
    if env_key:
        return os.environ.get(env_key) or None
    return None


def load_config(
    path: str | os.PathLike[str] | None = None, apply_env: bool = True
) -> OhmanConfig:
    """Load config from disk, falling back to defaults when no file exists.

    With apply_env, OHMAN_API_KEY (or the provider's own key variable) fills in
    the API key. The config command turns it off so env keys are never saved.
    """
    target = config_path(path)
    if target.exists():
        try:
            with open(target, encoding="utf-8") as f:
                data = json.load(f)
            config = OhmanConfig.model_validate(data)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"failed to read config file {target}: {e}") from e
        except ValidationError as e:
            raise ConfigError(f"failed to parse config file {target}: {e}") from e
        log.debug("loaded config from %s", target)
    else:
        log.debug("no config file at %s, using defaults", target)
        config = OhmanConfig()

    if not apply_env:
        return config
    if os.environ.get("OHMAN_API_KEY"):
        config.llm.api_key = os.environ["OHMAN_API_KEY"]
    elif not config.llm.api_key:
        config.llm.api_key = _env_api_key(config.llm.provider)
    return config


def save_config(config: OhmanConfig, path: str | os.PathLike[str] | None = None) -> Path:
    """Write config to disk with user-only permissions and return its path."""
    target = config_path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)
            f.write("\n")
        os.chmod(target, 0o600)
    except OSError as e:
        raise ConfigError(f"failed to write config file {target}: {e}") from e
    log.debug("saved config to %s", target)
    return target


def needs_setup(path: str | os.PathLike[str] | None = None) -> bool:
    """Return True when neither a config file nor an API key env var exists."""
    if config_path(path).exists():
        return False
    return _env_api_key(OhmanConfig().llm.provider) is None
