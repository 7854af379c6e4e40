"""Terminal drivers used by the line reader."""

import logging
import os
import select
import shutil
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, TextIO

from ohman.errors import RawModeUnavailable

log = logging.getLogger(__name__)


class TerminalDriver(Protocol):
    """Byte-level terminal access needed by LineReader."""

    def is_terminal(self) -> bool: ...

    def width(self) -> int: ...

    def raw_mode(self) -> AbstractContextManager[None]: ...

    def read_byte(self) -> bytes: ...

    def pending(self) -> bool: ...

    def write(self, text: str) -> None: ...

    def readline(self) -> str: ...


class PosixTerminal:
    """Terminal driver backed by termios on a real stdin/stdout pair."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def _fd(self) -> int:
        return self._stdin.fileno()

    def is_terminal(self) -> bool:
        try:
            return self._stdin.isatty()
        except ValueError:
            return False

    def width(self) -> int:
        return shutil.get_terminal_size(fallback=(80, 24)).columns

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Put stdin into raw mode and restore the previous attributes on exit."""
        try:
            fd = self._fd()
            old_attrs = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as e:
            log.debug("raw mode unavailable: %s", e)
            raise RawModeUnavailable(str(e)) from e
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_attrs)

    def read_byte(self) -> bytes:
        return os.read(self._fd(), 1)

    def pending(self) -> bool:
        ready, _, _ = select.select([self._fd()], [], [], 0)
        return bool(ready)

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    def readline(self) -> str:
        return self._stdin.readline()
