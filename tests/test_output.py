"""Unit tests for ohman.output."""

import io

from ohman.output import GREEN, RESET, Printer, colorize, supports_color


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestSupportsColor:
    def test_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert supports_color(_TTY()) is True

    def test_not_a_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert supports_color(io.StringIO()) is False

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert supports_color(_TTY()) is False

    def test_dumb_terminal(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert supports_color(_TTY()) is False


class TestPrinter:
    def test_plain_output_without_tty(self):
        stream = io.StringIO()
        printer = Printer(stream=stream)
        printer.success("done")
        printer.plain()
        assert stream.getvalue() == "✅ done\n\n"

    def test_colored_on_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        stream = _TTY()
        Printer(stream=stream).success("done")
        assert stream.getvalue() == colorize("✅ done", GREEN) + "\n"

    def test_color_disabled_by_config(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        stream = _TTY()
        Printer(color=False, stream=stream).error("bad")
        assert RESET not in stream.getvalue()
        assert "❌ bad" in stream.getvalue()
