"""LLM interaction for ohman."""

import json
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import litellm

from ohman.errors import LLMError
from ohman.models import LLMConfig

log = logging.getLogger(__name__)

# Suppress litellm's noisy logging
litellm.suppress_debug_info = True

StreamHandler = Callable[[str], None]


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Map a role string to a Role; unknown roles are sent as user."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


@dataclass(frozen=True)
class Message:
    """Single chat message for the LLM API."""

    role: Role
    content: str

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class ChatResponse:
    content: str
    finish_reason: str = ""
    tokens_used: int = 0


class ChatClient(Protocol):
    def chat(self, messages: Sequence[Message]) -> ChatResponse: ...

    def chat_stream(
        self, messages: Sequence[Message], on_chunk: StreamHandler | None
    ) -> ChatResponse: ...


def _print_chunk(chunk: str) -> None:
    sys.stdout.write(chunk)
    sys.stdout.flush()


def model_id(config: LLMConfig) -> str:
    """Return the LiteLLM model identifier, adding the provider prefix if missing."""
    if "/" in config.model or not config.provider:
        return config.model
    return f"{config.provider}/{config.model}"


class LiteLLMClient:
    """Streaming chat client for any backend LiteLLM supports."""

    def __init__(self, config: LLMConfig, show_prompt: bool = False) -> None:
        self._config = config
        self._show_prompt = show_prompt

    def chat(self, messages: Sequence[Message]) -> ChatResponse:
        """Stream the answer to stdout and return the full response."""
        return self.chat_stream(messages, _print_chunk)

    def _request_kwargs(self, messages: Sequence[Message]) -> dict:
        cfg = self._config
        kwargs: dict = {
            "model": model_id(cfg),
            "messages": [m.as_dict() for m in messages],
            "stream": True,
            "timeout": cfg.timeout,
        }
        if cfg.api_key:
            kwargs["api_key"] = cfg.api_key
        if cfg.base_url:
            kwargs["api_base"] = cfg.base_url
        if cfg.max_tokens > 0:
            kwargs["max_tokens"] = cfg.max_tokens
        if cfg.temperature > 0:
            kwargs["temperature"] = cfg.temperature
        return kwargs

    def chat_stream(
        self, messages: Sequence[Message], on_chunk: StreamHandler | None
    ) -> ChatResponse:
        kwargs = self._request_kwargs(messages)
        log.debug("model=%s", kwargs["model"])
        if self._show_prompt:
            log.debug("messages=%s", json.dumps(kwargs["messages"], indent=2))

        parts: list[str] = []
        finish_reason = ""
        try:
            for chunk in litellm.completion(**kwargs):
                if not chunk.choices:
                    continue
                choice = chunk.choices[0]
                delta = choice.delta.content if choice.delta else None
                if delta:
                    parts.append(delta)
                    if on_chunk is not None:
                        on_chunk(delta)
                if choice.finish_reason:
                    finish_reason = choice.finish_reason
        except Exception as e:
            raise LLMError(f"streaming error: {e}") from e

        content = "".join(parts)
        if not content:
            raise LLMError("no response received")
        log.debug("received %d chars, finish_reason=%s", len(content), finish_reason)
        return ChatResponse(content=content, finish_reason=finish_reason)
