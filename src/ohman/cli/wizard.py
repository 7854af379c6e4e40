"""Interactive configuration wizard."""

import getpass
from collections.abc import Callable

from ohman.config import PROVIDERS, save_config
from ohman.models import DEFAULT_MODEL, OhmanConfig

Prompt = Callable[[str], str]


def _choose_provider(current: str, ask: Prompt) -> str:
    names = sorted(PROVIDERS)
    print("Providers:")
    for i, name in enumerate(names, start=1):
        print(f"  {i}. {name:<11} {PROVIDERS[name]['label']}")
    while True:
        answer = ask(f"Provider [{current}]: ").strip()
        if not answer:
            return current
        if answer.isdigit() and 1 <= int(answer) <= len(names):
            return names[int(answer) - 1]
        if answer in PROVIDERS:
            return answer
        print(f"Unknown provider: {answer}")


def _switch_provider(config: OhmanConfig, provider: str) -> None:
    """Select provider; a provider change resets the model to its default."""
    if provider != config.llm.provider:
        config.llm.model = PROVIDERS[provider]["default_model"]
    config.llm.provider = provider


def run_configure(
    existing: OhmanConfig,
    *,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    clear_api_key: bool = False,
    base_url: str | None = None,
    clear_base_url: bool = False,
    interactive: bool = False,
    config_file: str | None = None,
    ask: Prompt = input,
    ask_secret: Prompt = getpass.getpass,
) -> OhmanConfig:
    """Apply explicit options (and optionally the wizard) and save the result."""
    config = existing.model_copy(deep=True)
    llm = config.llm

    if provider is not None:
        if provider not in PROVIDERS:
            raise ValueError(f"unknown provider: {provider}")
        _switch_provider(config, provider)
    if model is not None:
        llm.model = model
    if clear_api_key:
        llm.api_key = None
    elif api_key is not None:
        llm.api_key = api_key
    if clear_base_url:
        llm.base_url = None
    elif base_url is not None:
        llm.base_url = base_url

    if interactive:
        print("🔧 Oh Man! Configuration")
        print("========================")
        print()
        _switch_provider(config, _choose_provider(llm.provider, ask))

        hint = llm.base_url or "https://api.openai.com/v1"
        entered = ask(f"API Base URL (empty for the provider default, e.g. {hint}): ").strip()
        if entered:
            llm.base_url = entered

        if PROVIDERS[llm.provider]["env_key"] is not None:
            state = "set, Enter keeps it" if llm.api_key else "not set"
            entered = ask_secret(f"API Key ({state}): ").strip()
            if entered:
                llm.api_key = entered

        entered = ask(f"Model name [{llm.model or DEFAULT_MODEL}]: ").strip()
        if entered:
            llm.model = entered

    save_config(config, config_file)
    return config


def run_setup(
    config_file: str | None = None,
    ask: Prompt = input,
    ask_secret: Prompt = getpass.getpass,
) -> OhmanConfig:
    """First-run setup: walk through the wizard starting from defaults."""
    print("Welcome to ohman! No configuration was found, let's create one.")
    print()
    return run_configure(
        OhmanConfig(),
        interactive=True,
        config_file=config_file,
        ask=ask,
        ask_secret=ask_secret,
    )
