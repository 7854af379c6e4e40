"""Live integration tests that hit a real LLM backend."""

from __future__ import annotations

import io
import os

import pytest

from ohman.app import Assistant
from ohman.llm import LiteLLMClient, Message, Role
from ohman.models import LLMConfig, OhmanConfig
from ohman.session import SessionStore

pytestmark = pytest.mark.integration


def _load_live_config() -> OhmanConfig:
    if os.environ.get("OHMAN_RUN_INTEGRATION") != "1":
        pytest.skip("Set OHMAN_RUN_INTEGRATION=1 to run live integration tests")

    model = os.environ.get("OHMAN_INTEGRATION_MODEL")
    if not model:
        pytest.skip("Set OHMAN_INTEGRATION_MODEL (e.g. openai/gpt-4o-mini) for live tests")

    provider = model.split("/", 1)[0] if "/" in model else "openai"
    api_key = os.environ.get("OHMAN_INTEGRATION_API_KEY")
    if provider != "ollama" and not api_key:
        pytest.skip("Set OHMAN_INTEGRATION_API_KEY for live integration tests")

    return OhmanConfig(
        llm=LLMConfig(
            provider=provider,
            model=model,
            api_key=api_key,
            base_url=os.environ.get("OHMAN_INTEGRATION_BASE_URL") or None,
            max_tokens=256,
        )
    )


def test_live_stream_returns_text() -> None:
    config = _load_live_config()
    chunks: list[str] = []

    response = LiteLLMClient(config.llm).chat_stream(
        [
            Message(Role.SYSTEM, "Answer with a single word."),
            Message(Role.USER, "Which command lists directory contents on Linux?"),
        ],
        chunks.append,
    )

    assert response.content.strip()
    assert "".join(chunks) == response.content
    assert "ls" in response.content.lower()


def test_live_log_analysis_mentions_the_error(tmp_path) -> None:
    config = _load_live_config()
    log_file = tmp_path / "app.log"
    log_file.write_text(
        "2025-02-01 10:23:45 ERROR Database connection failed: connection refused\n"
        "2025-02-01 10:23:46 WARN Retrying connection\n"
        "2025-02-01 10:23:47 INFO Application started\n"
    )
    out = io.StringIO()

    assistant = Assistant(config, sessions=SessionStore(tmp_path / "state"), stream=out)
    text = assistant.analyze_log_file(log_file)

    assert text is not None
    assert "database" in text.lower() or "connection" in text.lower()
