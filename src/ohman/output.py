"""Terminal presentation helpers."""

import os
import sys
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"


def supports_color(stream: TextIO | None = None) -> bool:
    """Return whether ANSI color output should be used."""
    stream = stream if stream is not None else sys.stdout
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"


class Printer:
    """Print status lines, colored when enabled and the stream is a TTY."""

    def __init__(self, color: bool = True, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self._color = color and supports_color(self.stream)

    def _emit(self, text: str, color: str | None = None) -> None:
        if color and self._color:
            text = colorize(text, color)
        print(text, file=self.stream, flush=True)

    def plain(self, text: str = "") -> None:
        self._emit(text)

    def success(self, text: str) -> None:
        self._emit(f"✅ {text}", GREEN)

    def error(self, text: str) -> None:
        self._emit(f"❌ {text}", RED)

    def warning(self, text: str) -> None:
        self._emit(f"⚠️  {text}", YELLOW)

    def info(self, text: str) -> None:
        self._emit(f"ℹ️  {text}", BLUE)

    def heading(self, text: str) -> None:
        self._emit(text, BOLD + CYAN)
