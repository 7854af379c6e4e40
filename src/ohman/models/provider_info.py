"""Provider table entry model."""

from typing import TypedDict


class ProviderInfo(TypedDict):
    """What ohman needs to know about an LLM provider."""

    label: str
    # Variable litellm reads the key from; None when no key is needed.
    env_key: str | None
    default_model: str
