"""Data models for log analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Severity assigned to a log line by keyword search."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


class LogType(str, Enum):
    APPLICATION = "application"
    SYSTEM = "system"
    ACCESS = "access"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One classified log line."""

    raw: str
    timestamp: str
    level: LogLevel
    message: str
