"""Configuration model for ohman."""

from pydantic import BaseModel, Field

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o-mini"


class LLMConfig(BaseModel):
    """Chat-completion backend settings."""

    provider: str = DEFAULT_PROVIDER
    api_key: str | None = None
    base_url: str | None = None
    model: str = DEFAULT_MODEL
    max_tokens: int = 4096
    temperature: float = 0.7
    timeout: int = 60


class ShellConfig(BaseModel):
    history_file: str | None = None


class OutputConfig(BaseModel):
    color: bool = True
    language: str = "en-US"


class DebugConfig(BaseModel):
    enabled: bool = False
    show_prompt: bool = False


class OhmanConfig(BaseModel):
    """Runtime configuration for ohman."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
