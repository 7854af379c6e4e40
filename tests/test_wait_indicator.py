"""Unit tests for ohman.wait_indicator."""

import os
import time
from typing import TextIO, cast

from ohman.wait_indicator import WaitIndicator


class _RecordingStream:
    def __init__(self, tty: bool = True) -> None:
        self._tty = tty
        self.writes: list[str] = []
        self.flush_calls = 0

    def isatty(self) -> bool:
        return self._tty

    def write(self, text: str) -> int:
        self.writes.append(text)
        return len(text)

    def flush(self) -> None:
        self.flush_calls += 1


class _RaisingStream(_RecordingStream):
    def write(self, text: str) -> int:
        raise OSError("stream write failed")


def test_start_stop_lifecycle_stops_and_cleans_up_thread() -> None:
    stream = _RecordingStream(tty=True)
    indicator = WaitIndicator("Thinking...", stream=cast(TextIO, stream), interval=0.01)

    indicator.start()
    time.sleep(0.03)
    indicator.stop()

    assert indicator._thread is not None
    assert indicator._stop_event.is_set()
    assert not indicator._thread.is_alive()
    assert any("Thinking..." in w for w in stream.writes)


def test_stop_twice_clears_line_once() -> None:
    stream = _RecordingStream(tty=True)
    indicator = WaitIndicator(stream=cast(TextIO, stream), interval=0.01)

    indicator.start()
    indicator.stop()
    writes_after_first_stop = len(stream.writes)
    indicator.stop()

    assert len(stream.writes) == writes_after_first_stop


def test_context_manager_stops_on_exit() -> None:
    stream = _RecordingStream(tty=True)
    with WaitIndicator(stream=cast(TextIO, stream), interval=0.01) as indicator:
        time.sleep(0.02)

    assert indicator._stop_event.is_set()


def test_non_tty_start_stop_are_noops_without_writing() -> None:
    stream = _RecordingStream(tty=False)
    indicator = WaitIndicator(stream=cast(TextIO, stream), interval=0.01)

    indicator.start()
    indicator.stop()

    assert indicator._enabled is False
    assert indicator._thread is None
    assert stream.writes == []
    assert stream.flush_calls == 0


def test_write_line_disables_indicator_on_oserror() -> None:
    stream = _RaisingStream(tty=True)
    indicator = WaitIndicator(stream=cast(TextIO, stream))

    indicator._write_line("waiting")

    assert indicator._enabled is False


def test_clear_line_writes_expected_terminal_clear(monkeypatch) -> None:
    stream = _RecordingStream(tty=True)
    indicator = WaitIndicator(stream=cast(TextIO, stream))
    monkeypatch.setattr(
        "ohman.wait_indicator.shutil.get_terminal_size", lambda fallback: os.terminal_size((20, 24))
    )

    indicator._clear_line()

    assert stream.writes == ["\r" + (" " * 19) + "\r"]
    assert stream.flush_calls == 1
