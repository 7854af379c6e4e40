"""Log sources other than plain files: journald units and piped stdin."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
import sys
from typing import TextIO

from ohman.errors import LogReadError

log = logging.getLogger(__name__)

UNIT_SUFFIXES = (
    ".service",
    ".socket",
    ".timer",
    ".path",
    ".slice",
    ".scope",
    ".device",
    ".mount",
    ".automount",
    ".swap",
    ".target",
)

COMMON_SERVICES = frozenset(
    {
        "nginx",
        "apache2",
        "apache",
        "httpd",
        "docker",
        "containerd",
        "sshd",
        "ssh",
        "mysql",
        "mariadb",
        "postgresql",
        "postgres",
        "redis",
        "mongodb",
        "systemd",
        "network",
    }
)

JOURNALCTL_TIMEOUT_SECONDS = 30


def is_journal_unit(text: str) -> bool:
    """Return whether text names a systemd unit or a well-known service."""
    if text.endswith(UNIT_SUFFIXES):
        return True
    return text.lower() in COMMON_SERVICES


def get_journal_logs(unit: str, limit: int = 0) -> str:
    """Return journalctl output for a unit, raising LogReadError on failure."""
    if shutil.which("journalctl") is None:
        raise LogReadError("journalctl not found")

    args = ["journalctl", "-u", unit, "--no-pager"]
    if limit > 0:
        args += ["-n", str(limit)]

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=JOURNALCTL_TIMEOUT_SECONDS,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        raise LogReadError(f"journalctl failed: {e}") from e

    log.debug("journalctl -u %s rc=%d, %d chars", unit, result.returncode, len(result.stdout))
    if result.returncode != 0:
        err = result.stderr.strip()
        if (
            "No journal files were found" in err
            or "Unit" in err
            or "not found" in err
        ):
            raise LogReadError(f"journalctl failed: {err}")

    if not result.stdout.strip():
        raise LogReadError(f"no logs found for unit {unit}")
    return result.stdout


def is_piped_input(stream: TextIO | None = None) -> bool:
    """Return whether stdin is a pipe or a redirected file rather than a terminal."""
    stream = stream if stream is not None else sys.stdin
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError):
        return False
    return not stat.S_ISCHR(mode)


def read_piped_input(stream: TextIO | None = None) -> str:
    """Read all of stdin when it is piped; return "" for an interactive terminal."""
    stream = stream if stream is not None else sys.stdin
    if not is_piped_input(stream):
        return ""
    try:
        return stream.read()
    except OSError as e:
        raise LogReadError(f"failed to read from stdin: {e}") from e
