"""Raw-mode terminal line input."""

from ohman.input.reader import EXIT_SENTINEL, LineReader
from ohman.input.terminal import PosixTerminal, TerminalDriver

__all__ = ["EXIT_SENTINEL", "LineReader", "PosixTerminal", "TerminalDriver"]
