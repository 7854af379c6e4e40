"""Classify log lines and aggregate them into a prompt-ready report."""

from __future__ import annotations

import logging
import os
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ohman.errors import LogReadError
from ohman.logs.models import LogEntry, LogLevel, LogType

log = logging.getLogger(__name__)

# Checked in this order; the first level name found anywhere in the line wins.
LEVEL_PRIORITY = (LogLevel.FATAL, LogLevel.ERROR, LogLevel.WARN, LogLevel.DEBUG, LogLevel.INFO)

# Rendering order for per-level counts.
SEVERITY_ORDER = (LogLevel.FATAL, LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO, LogLevel.DEBUG)

# Distinguishing prefixes of ISO (YYYY-MM-DDTHH:MM:SS), slash (YYYY/MM/DD HH:MM:SS),
# US slash (MM/DD/YYYY HH:MM:SS) and syslog (Mon D HH:MM:SS) timestamps.
TIMESTAMP_PREFIXES = (
    re.compile(r"\d{4}-\d{2}-"),
    re.compile(r"\d{4}/\d{2}/"),
    re.compile(r"\d{2}/\d{2}/"),
    re.compile(r"\b[A-Z][a-z]{2} {1,2}\d{1,2} "),
)
TIMESTAMP_WINDOW = 30

_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}")
_LEVEL_PREFIX_RE = re.compile(
    r"^\s*\[?(?:DEBUG|INFO|WARN(?:ING)?|ERROR|FATAL)\b\]?\s*:?\s*", re.IGNORECASE
)
_LEVEL_MARKER_RE = re.compile(r"\b(?:DEBUG|INFO|WARNING|WARN|ERROR|FATAL)\b")

SAMPLE_SIZE = 20
ERROR_SAMPLE_SIZE = 10
WARNING_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregated view of a log: counts per level plus bounded samples."""

    log_type: LogType
    total: int
    by_level: Mapping[LogLevel, int] = field(default_factory=dict)
    samples: tuple[LogEntry, ...] = ()
    errors: tuple[LogEntry, ...] = ()
    warnings: tuple[LogEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_level", MappingProxyType(dict(self.by_level)))
        object.__setattr__(self, "samples", tuple(self.samples))
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def to_text(self) -> str:
        """Render the fixed-section report embedded in the log-analysis prompt."""
        parts = [
            "## Log Analysis Summary\n\n",
            f"Log Type: {self.log_type.value}\n",
            f"Total Entries: {self.total}\n\n",
            "## Statistics by Level\n",
        ]
        for level in SEVERITY_ORDER:
            count = self.by_level.get(level, 0)
            if count > 0:
                parts.append(f"- {level.value}: {count}\n")
        parts.append("\n")

        if self.errors:
            parts.append(f"## Error Entries ({len(self.errors)})\n")
            parts.extend(f"{e.raw}\n\n" for e in sample_entries(self.errors, ERROR_SAMPLE_SIZE))
            parts.append("\n")

        if self.warnings:
            parts.append(f"## Warning Entries ({len(self.warnings)})\n")
            parts.extend(
                f"{e.raw}\n\n" for e in sample_entries(self.warnings, WARNING_SAMPLE_SIZE)
            )
            parts.append("\n")

        parts.append("## Sample Log Entries\n")
        parts.extend(f"{e.raw}\n\n" for e in sample_entries(self.samples, SAMPLE_SIZE))
        return "".join(parts)


def parse_level(line: str) -> LogLevel:
    """Return the first level (by priority) whose name occurs in the line."""
    lower = line.lower()
    for level in LEVEL_PRIORITY:
        if level.value.lower() in lower:
            return level
    return LogLevel.INFO


def parse_timestamp(line: str) -> str:
    """Return a best-effort timestamp window, or "" when no prefix is found."""
    for prefix in TIMESTAMP_PREFIXES:
        match = prefix.search(line)
        if match:
            start = match.start()
            return line[start : start + TIMESTAMP_WINDOW].strip()
    return ""


def parse_message(line: str) -> str:
    """Strip timestamp/level prefixes and return the message text."""
    text = line
    removed = False

    match = _TIMESTAMP_RE.search(text)
    if match:
        text = text[match.end() :]
        removed = True
    else:
        match = _LEVEL_PREFIX_RE.match(text)
        if match:
            text = text[match.end() :]
            removed = True

    marker = _LEVEL_MARKER_RE.search(text)
    if marker:
        return text[marker.end() :].lstrip(":]").strip()
    if removed:
        return text.strip()
    return line


def parse_line(line: str) -> LogEntry:
    return LogEntry(
        raw=line,
        timestamp=parse_timestamp(line),
        level=parse_level(line),
        message=parse_message(line),
    )


def detect_log_type(path: str | os.PathLike[str]) -> LogType:
    """Infer the log type from substrings of the file path."""
    name = os.fspath(path)
    if "access" in name:
        return LogType.ACCESS
    if "error" in name or "err" in name:
        return LogType.ERROR
    if "syslog" in name or "dmesg" in name:
        return LogType.SYSTEM
    return LogType.APPLICATION


def sample_entries(entries: Sequence[LogEntry], max_count: int) -> list[LogEntry]:
    """Return all entries, or head/middle/tail slices of max_count // 3 each."""
    if len(entries) <= max_count:
        return list(entries)

    per_slice = max_count // 3
    middle = len(entries) // 2
    samples = list(entries[:per_slice])
    samples.extend(entries[middle : middle + per_slice])
    samples.extend(entries[len(entries) - per_slice :])
    return samples


def filter_by_level(entries: Iterable[LogEntry], levels: Iterable[LogLevel]) -> list[LogEntry]:
    wanted = set(levels)
    return [entry for entry in entries if entry.level in wanted]


def build_result(entries: Sequence[LogEntry], log_type: LogType) -> AnalysisResult:
    by_level = Counter(entry.level for entry in entries)
    return AnalysisResult(
        log_type=log_type,
        total=len(entries),
        by_level=by_level,
        samples=tuple(sample_entries(entries, SAMPLE_SIZE)),
        errors=tuple(filter_by_level(entries, (LogLevel.ERROR, LogLevel.FATAL))),
        warnings=tuple(filter_by_level(entries, (LogLevel.WARN,))),
    )


def _strip_eol(line: str) -> str:
    """Drop one trailing LF, then one trailing CR. Other separators stay in the line."""
    line = line.removesuffix("\n")
    return line.removesuffix("\r")


def analyze_text(content: str) -> AnalysisResult:
    """Analyze in-memory log text. Never fails; empty input gives zero entries."""
    lines = (_strip_eol(line) for line in content.split("\n"))
    entries = [parse_line(line) for line in lines if line.strip()]
    log.debug("analyzed %d entries from text", len(entries))
    return build_result(entries, LogType.APPLICATION)


def analyze_file(path: str | os.PathLike[str], limit: int = 0) -> AnalysisResult:
    """Stream a log file and analyze up to ``limit`` non-blank lines (0 = all)."""
    entries: list[LogEntry] = []
    try:
        with open(path, encoding="utf-8", errors="replace", newline="\n") as f:
            for raw in f:
                line = _strip_eol(raw)
                if not line.strip():
                    continue
                entries.append(parse_line(line))
                if limit > 0 and len(entries) >= limit:
                    break
    except OSError as e:
        raise LogReadError(f"failed to read log file {os.fspath(path)}: {e}") from e

    log_type = detect_log_type(path)
    log.debug("analyzed %d entries from %s (type=%s)", len(entries), path, log_type.value)
    return build_result(entries, log_type)
