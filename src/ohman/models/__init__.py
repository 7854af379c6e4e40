"""Model package for ohman."""

from ohman.models.failed_command import FailedCommand
from ohman.models.ohman_config import (
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DebugConfig,
    LLMConfig,
    OhmanConfig,
    OutputConfig,
    ShellConfig,
)
from ohman.models.provider_info import ProviderInfo
from ohman.models.session_entry import EntryType, SessionEntry

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_PROVIDER",
    "DebugConfig",
    "EntryType",
    "FailedCommand",
    "LLMConfig",
    "OhmanConfig",
    "OutputConfig",
    "ProviderInfo",
    "SessionEntry",
    "ShellConfig",
]
