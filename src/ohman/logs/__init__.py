"""Log analysis: classification, aggregation, and log sources."""

from ohman.logs.analyzer import (
    AnalysisResult,
    analyze_file,
    analyze_text,
    detect_log_type,
    parse_level,
    parse_line,
    parse_message,
    parse_timestamp,
    sample_entries,
)
from ohman.logs.models import LogEntry, LogLevel, LogType
from ohman.logs.sources import (
    get_journal_logs,
    is_journal_unit,
    is_piped_input,
    read_piped_input,
)

__all__ = [
    "AnalysisResult",
    "LogEntry",
    "LogLevel",
    "LogType",
    "analyze_file",
    "analyze_text",
    "detect_log_type",
    "get_journal_logs",
    "is_journal_unit",
    "is_piped_input",
    "parse_level",
    "parse_line",
    "parse_message",
    "parse_timestamp",
    "read_piped_input",
    "sample_entries",
]
