"""Read failed commands recorded by the shell hook and the shell history file."""

import logging
import os
import re
import time
from collections import deque
from datetime import datetime
from pathlib import Path

from ohman.errors import NoFailedCommand
from ohman.models import FailedCommand
from ohman.shell.detection import detect_shell

log = logging.getLogger(__name__)

HOOK_FILE_PREFIX = "/tmp/.ohman_last_failed"
MAX_FAILED_AGE_SECONDS = 5 * 60

# zsh extended history: ": <start>:<elapsed>;<command>"
_ZSH_EXTENDED_RE = re.compile(r"^: \d+:\d+;")


def _hook_files() -> list[Path]:
    # The hook writes one file per shell PID; our parent is that shell.
    return [Path(f"{HOOK_FILE_PREFIX}_{os.getppid()}"), Path(HOOK_FILE_PREFIX)]


def parse_hook_record(data: str) -> FailedCommand:
    """Parse an ``exitcode|command|timestamp`` hook record."""
    head, sep, rest = data.strip().partition("|")
    if not sep:
        raise NoFailedCommand("invalid hook file format")

    try:
        exit_code = int(head)
    except ValueError:
        exit_code = 0

    # The command itself may contain pipes; only an all-digit tail is a timestamp.
    command, recorded_at = rest, None
    body, sep, tail = rest.rpartition("|")
    if sep and tail.isdigit():
        command = body
        try:
            recorded_at = datetime.fromtimestamp(int(tail))
        except (OverflowError, OSError, ValueError):
            recorded_at = None
    return FailedCommand(command=command, exit_code=exit_code, time=recorded_at)


def get_last_failed(max_age: float = MAX_FAILED_AGE_SECONDS) -> FailedCommand:
    """Return the most recent failed command recorded by the shell hook."""
    for path in _hook_files():
        try:
            data = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        log.debug("read hook file %s", path)
        failed = parse_hook_record(data)
        if failed.time is not None and time.time() - failed.time.timestamp() > max_age:
            raise NoFailedCommand("the latest failed command has expired")
        return failed
    raise NoFailedCommand("unable to get failed command information")


def history_file() -> Path | None:
    """Return the shell history file path ($HISTFILE, else per-shell default)."""
    env_file = os.environ.get("HISTFILE", "").strip()
    if env_file:
        return Path(env_file).expanduser()
    try:
        home = Path.home()
    except RuntimeError:
        return None
    if detect_shell() == "zsh":
        return home / ".zsh_history"
    return home / ".bash_history"


def get_history(limit: int, path: str | os.PathLike[str] | None = None) -> list[str]:
    """Return the last ``limit`` commands from the shell history file."""
    target = Path(path) if path is not None else history_file()
    if target is None:
        return []
    lines: deque[str] = deque(maxlen=max(limit, 0))
    try:
        with open(target, encoding="utf-8", errors="replace") as f:
            for raw in f:
                line = _ZSH_EXTENDED_RE.sub("", raw.rstrip("\n"))
                if line.strip():
                    lines.append(line)
    except OSError as e:
        log.debug("cannot read history file %s: %s", target, e)
        return []
    return list(lines)
