"""Shell integration: failed-command capture and history."""

from ohman.shell.detection import classify_shell, detect_shell
from ohman.shell.history import get_history, get_last_failed, history_file, parse_hook_record

__all__ = [
    "classify_shell",
    "detect_shell",
    "get_history",
    "get_last_failed",
    "history_file",
    "parse_hook_record",
]
