"""Fetch man pages and --help output for a command."""

import logging
import os
import re
import subprocess
from dataclasses import dataclass

from ohman.errors import ManPageNotFound

log = logging.getLogger(__name__)

HELP_FLAGS = ("--help", "-h", "-help")

# Overstrike sequences ("X\bX" for bold, "_\bX" for underline) emitted by man.
_OVERSTRIKE_RE = re.compile(r".\x08")


@dataclass
class ManPage:
    command: str
    section: int
    content: str
    source: str = "man"


def strip_overstrike(text: str) -> str:
    """Remove backspace formatting, like piping through `col -b`."""
    return _OVERSTRIKE_RE.sub("", text)


def get_man_page(command: str, section: int = 0) -> ManPage:
    """Run `man [section] command` and return its plain-text content."""
    args = ["man"]
    if section > 0:
        args.append(str(section))
    args.append(command)

    env = {**os.environ, "MANPAGER": "cat", "MANWIDTH": "120"}
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=10,
            env=env,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        log.debug("man %s failed: %s", command, e)
        raise ManPageNotFound(command) from e

    content = strip_overstrike(result.stdout)
    if result.returncode != 0 or not content.strip():
        log.debug("man %s returned nothing (rc=%d)", command, result.returncode)
        raise ManPageNotFound(command)

    log.debug("man %s returned %d lines", command, len(content.splitlines()))
    return ManPage(command=command, section=section, content=content)


def get_help_output(command: str) -> str | None:
    """Try `--help`, `-h`, and `-help` and return the first non-empty output."""
    for flag in HELP_FLAGS:
        try:
            result = subprocess.run(
                [command, flag],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError) as e:
            log.debug("%s %s failed: %s", command, flag, e)
            return None
        output = result.stdout.strip() or result.stderr.strip()
        if output:
            log.debug("%s %s returned %d chars", command, flag, len(output))
            return output
    return None


def get_documentation(command: str, section: int = 0) -> ManPage:
    """Return the man page, falling back to --help output."""
    try:
        return get_man_page(command, section)
    except ManPageNotFound:
        help_output = get_help_output(command)
        if help_output:
            return ManPage(command=command, section=section, content=help_output, source="help")
        raise


def get_whatis(command: str) -> str | None:
    """Return the one-line `whatis` description of a command, if any."""
    try:
        result = subprocess.run(
            ["whatis", command],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        log.debug("whatis %s failed: %s", command, e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
