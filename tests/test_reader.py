"""Unit tests for ohman.input.reader."""

from contextlib import contextmanager

import pytest

from ohman.errors import InputInterrupted, InputReadError, RawModeUnavailable
from ohman.input import EXIT_SENTINEL, LineReader
from ohman.input.reader import CLEAR_LINE, utf8_sequence_length


class FakeTerminal:
    """In-memory terminal driver fed with a fixed byte string."""

    def __init__(self, data: bytes = b"", tty: bool = True, raw_ok: bool = True, lines=()):
        self._data = bytearray(data)
        self._tty = tty
        self._raw_ok = raw_ok
        self._lines = list(lines)
        self.output: list[str] = []
        self.raw_entered = 0
        self.raw_exited = 0

    def is_terminal(self) -> bool:
        return self._tty

    def width(self) -> int:
        return 100

    @contextmanager
    def raw_mode(self):
        if not self._raw_ok:
            raise RawModeUnavailable("not a tty")
        self.raw_entered += 1
        try:
            yield
        finally:
            self.raw_exited += 1

    def read_byte(self) -> bytes:
        if not self._data:
            return b""
        return bytes([self._data.pop(0)])

    def pending(self) -> bool:
        return bool(self._data)

    def write(self, text: str) -> None:
        self.output.append(text)

    def readline(self) -> str:
        if not self._lines:
            return ""
        return self._lines.pop(0)

    @property
    def echoed(self) -> str:
        return "".join(self.output)


def _read(data: bytes, prompt: str = "> ") -> tuple[str, FakeTerminal]:
    term = FakeTerminal(data)
    reader = LineReader(prompt, driver=term)
    return reader.read_line(), term


# ---------------------------------------------------------------------------
# utf8_sequence_length
# ---------------------------------------------------------------------------


class TestSequenceLength:
    @pytest.mark.parametrize(
        "lead,expected",
        [(0x41, 1), (0xC3, 2), (0xE4, 3), (0xF0, 4), (0x80, 1), (0xFF, 1)],
    )
    def test_lengths(self, lead, expected):
        assert utf8_sequence_length(lead) == expected


# ---------------------------------------------------------------------------
# raw mode line editing
# ---------------------------------------------------------------------------


class TestRawInput:
    def test_plain_ascii_line(self):
        line, term = _read(b"hello\r")
        assert line == "hello"
        assert term.echoed.startswith("> hello")
        assert term.echoed.endswith("\r\n")

    def test_raw_mode_entered_and_restored(self):
        _, term = _read(b"x\r")
        assert term.raw_entered == 1
        assert term.raw_exited == 1

    def test_result_is_trimmed(self):
        line, _ = _read(b"  spaced out  \r")
        assert line == "spaced out"

    def test_lf_terminates_line(self):
        line, _ = _read(b"abc\n")
        assert line == "abc"

    def test_crlf_is_a_single_line_end(self):
        term = FakeTerminal(b"one\r\ntwo\r")
        reader = LineReader("> ", driver=term)
        assert reader.read_line() == "one"
        assert reader.read_line() == "two"

    def test_byte_after_cr_is_kept_for_next_line(self):
        term = FakeTerminal(b"one\rtwo\r")
        reader = LineReader(driver=term)
        assert reader.read_line() == "one"
        assert reader.read_line() == "two"

    def test_multibyte_characters_are_decoded(self):
        line, term = _read("héllo 世界\r".encode())
        assert line == "héllo 世界"
        assert "é" in term.echoed

    def test_four_byte_character(self):
        line, _ = _read("ok 🎉\r".encode())
        assert line == "ok 🎉"

    def test_backspace_removes_whole_multibyte_character(self):
        line, term = _read("café".encode() + b"\x7f\r")
        assert line == "caf"
        assert CLEAR_LINE + "> caf" in term.output

    def test_ctrl_h_is_backspace(self):
        line, _ = _read(b"ab\x08\r")
        assert line == "a"

    def test_backspace_on_empty_line_is_ignored(self):
        line, term = _read(b"\x7f\x7fok\r")
        assert line == "ok"
        assert not any(CLEAR_LINE in chunk for chunk in term.output)

    def test_escape_sequence_is_discarded(self):
        line, _ = _read(b"ab\x1b[Dc\r")
        assert line == "abc"

    def test_tab_and_other_control_bytes_are_ignored(self):
        line, _ = _read(b"a\tb\x01c\r")
        assert line == "abc"

    def test_malformed_utf8_is_dropped(self):
        line, _ = _read(b"a\xc3(b\r")
        assert line == "ab"

    def test_stray_continuation_byte_is_dropped(self):
        line, _ = _read(b"a\xa9b\r")
        assert line == "ab"

    def test_ctrl_d_on_empty_line_returns_exit(self):
        line, term = _read(b"\x04")
        assert line == EXIT_SENTINEL
        assert term.output[-1] == "\r\n"

    def test_ctrl_d_mid_line_is_ignored(self):
        line, _ = _read(b"ab\x04c\r")
        assert line == "abc"

    def test_ctrl_c_raises_interrupted(self):
        term = FakeTerminal(b"abc\x03")
        reader = LineReader(driver=term)
        with pytest.raises(InputInterrupted):
            reader.read_line()
        assert "^C\r\n" in term.output
        assert term.raw_exited == 1

    def test_closed_stream_raises_read_error(self):
        term = FakeTerminal(b"abc")
        reader = LineReader(driver=term)
        with pytest.raises(InputReadError):
            reader.read_line()
        assert term.raw_exited == 1

    def test_read_line_prompt_overrides_default(self):
        term = FakeTerminal(b"x\r")
        reader = LineReader("old> ", driver=term)
        reader.read_line("new> ")
        assert term.output[0] == "new> "
        assert reader.prompt == "new> "

    def test_width_comes_from_terminal(self):
        reader = LineReader(driver=FakeTerminal())
        assert reader.width == 100


# ---------------------------------------------------------------------------
# buffered fallback
# ---------------------------------------------------------------------------


class TestBufferedFallback:
    def test_non_terminal_reads_a_line(self):
        term = FakeTerminal(tty=False, lines=["  what is -r?  \n"])
        reader = LineReader("> ", driver=term)
        assert reader.read_line() == "what is -r?"
        assert term.output == ["> "]
        assert term.raw_entered == 0

    def test_non_terminal_width_defaults_to_80(self):
        reader = LineReader(driver=FakeTerminal(tty=False))
        assert reader.width == 80

    def test_eof_returns_exit(self):
        reader = LineReader(driver=FakeTerminal(tty=False))
        assert reader.read_line() == EXIT_SENTINEL

    def test_raw_mode_failure_falls_back(self):
        term = FakeTerminal(raw_ok=False, lines=["hi\n"])
        reader = LineReader(driver=term)
        assert reader.read_line() == "hi"

    def test_readline_oserror_becomes_read_error(self):
        term = FakeTerminal(tty=False)

        def boom():
            raise OSError("bad fd")

        term.readline = boom
        reader = LineReader(driver=term)
        with pytest.raises(InputReadError, match="bad fd"):
            reader.read_line()
