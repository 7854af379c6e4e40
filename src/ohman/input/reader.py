"""Interactive line input with UTF-8 and backspace handling.

The reader puts the terminal in raw mode and decodes the byte stream itself,
so it works without readline. Multi-byte characters are collected from their
lead byte and echoed as one unit; backspace removes a whole character.
"""

import logging

from ohman.errors import InputInterrupted, InputReadError, RawModeUnavailable
from ohman.input.terminal import PosixTerminal, TerminalDriver

log = logging.getLogger(__name__)

EXIT_SENTINEL = "exit"

CTRL_C = 3
CTRL_D = 4
CTRL_H = 8
TAB = 9
LF = 10
CR = 13
ESC = 27
DEL = 127

CLEAR_LINE = "\r\x1b[K"
NEWLINE = "\r\n"


def utf8_sequence_length(lead: int) -> int:
    """Return the UTF-8 sequence length announced by a lead byte (1 if invalid)."""
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


class LineReader:
    """Read one line at a time from a terminal in raw mode."""

    def __init__(self, prompt: str = "", driver: TerminalDriver | None = None) -> None:
        self.prompt = prompt
        self._driver = driver if driver is not None else PosixTerminal()
        self.width = self._driver.width() if self._driver.is_terminal() else 80
        self._pushback: bytes = b""

    def read_line(self, prompt: str | None = None) -> str:
        """Read a line and return it stripped.

        Returns ``"exit"`` on Ctrl-D with an empty line. Raises
        InputInterrupted on Ctrl-C and InputReadError when the stream fails.
        """
        if prompt is not None:
            self.prompt = prompt

        if not self._driver.is_terminal():
            return self._read_buffered()
        try:
            with self._driver.raw_mode():
                return self._read_raw()
        except RawModeUnavailable:
            log.debug("falling back to buffered input")
            return self._read_buffered()

    def _read_buffered(self) -> str:
        self._driver.write(self.prompt)
        try:
            line = self._driver.readline()
        except OSError as e:
            raise InputReadError(f"failed to read input: {e}") from e
        if not line:
            return EXIT_SENTINEL
        return line.strip()

    def _next_byte(self) -> bytes:
        if self._pushback:
            b, self._pushback = self._pushback, b""
            return b
        try:
            return self._driver.read_byte()
        except OSError as e:
            raise InputReadError(f"failed to read input: {e}") from e

    def _read_raw(self) -> str:
        chars: list[str] = []
        self._driver.write(self.prompt)

        while True:
            data = self._next_byte()
            if not data:
                raise InputReadError("input stream closed")
            b = data[0]

            if b == CTRL_C:
                self._driver.write("^C" + NEWLINE)
                raise InputInterrupted()

            if b == CTRL_D:
                if not chars:
                    self._driver.write(NEWLINE)
                    return EXIT_SENTINEL
                # Ctrl-D mid-line is deliberately a no-op.
                continue

            if b in (CR, LF):
                if b == CR:
                    self._consume_paired_lf()
                self._driver.write(NEWLINE)
                return "".join(chars).strip()

            if b in (DEL, CTRL_H):
                if chars:
                    chars.pop()
                    self._redraw(chars)
                continue

            if b == ESC:
                # Arrow keys and friends arrive as ESC + two bytes.
                self._next_byte()
                self._next_byte()
                continue

            if b == TAB:
                continue

            if 32 <= b <= 126:
                ch = chr(b)
                chars.append(ch)
                self._driver.write(ch)
            elif b >= 0x80:
                ch = self._decode_multibyte(b)
                if ch is not None:
                    chars.append(ch)
                    self._driver.write(ch)

    def _consume_paired_lf(self) -> None:
        if self._pushback or not self._driver.pending():
            return
        nxt = self._next_byte()
        if nxt and nxt[0] != LF:
            self._pushback = nxt

    def _decode_multibyte(self, lead: int) -> str | None:
        seq = bytearray([lead])
        for _ in range(utf8_sequence_length(lead) - 1):
            data = self._next_byte()
            if not data:
                break
            seq += data
        try:
            decoded = seq.decode("utf-8")
        except UnicodeDecodeError:
            log.debug("dropping malformed UTF-8 sequence %r", bytes(seq))
            return None
        if len(decoded) != 1 or decoded == "\ufffd":
            return None
        return decoded

    def _redraw(self, chars: list[str]) -> None:
        self._driver.write(CLEAR_LINE + self.prompt + "".join(chars))
