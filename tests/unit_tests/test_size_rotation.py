"""
Size-based rotation tests.

Every line written here is 103 bytes: newline, 23-byte timestamp, " - ",
"INFO: " and a 70-character message. Five lines (515 bytes) exceed the
500-byte threshold, so the sixth write rotates.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rotolog import rotation
from rotolog.exceptions import SinkOpenError
from rotolog.levels import LogLevel, Policy
from rotolog.rotation import numbered_archive, rotate_by_size
from rotolog.sinks import FileSink


def _message(i: int) -> str:
    return f"{i:02d}" + "x" * 68


def _text(path) -> str:
    return Path(path).read_text(encoding="utf-8")


def _numbers(text: str) -> list[int]:
    return [int(line.split("INFO: ")[1][:2]) for line in text.split("\n")[1:]]


def test_line_size_assumption(tmp_path, make_logger):
    log = make_logger()
    sink = log.set_level_sink(LogLevel.INFO, tmp_path / "app.log")
    log.info(_message(1))
    assert sink.file_size() == 103


def test_no_rotation_at_or_below_threshold(tmp_path, clock):
    sink = FileSink(tmp_path / "app.log", Policy.MAX_SIZE, 4, 103, clock=clock)
    try:
        sink.write_entry("INFO: ", _message(1))
        assert not rotate_by_size(sink)
        assert not Path(numbered_archive(sink.path, 1)).exists()
    finally:
        sink.close()


def test_rotation_on_threshold_crossing(tmp_path, make_logger):
    path = tmp_path / "app.log"
    log = make_logger()
    log.set_level_sink(LogLevel.INFO, path, Policy.MAX_SIZE, 4, 500)

    for i in range(1, 6):
        log.info(_message(i))
    log.flush()
    assert not Path(f"{path}.1").exists()

    log.info(_message(6))
    log.flush()
    assert _numbers(_text(f"{path}.1")) == [1, 2, 3, 4, 5]
    assert _numbers(_text(path)) == [6]


def test_archives_shift_and_oldest_ages_out(tmp_path, make_logger):
    path = tmp_path / "app.log"
    log = make_logger()
    log.set_level_sink(LogLevel.INFO, path, Policy.MAX_SIZE, 4, 500)

    for i in range(1, 31):
        log.info(_message(i))
    log.flush()

    assert _numbers(_text(path)) == [26, 27, 28, 29, 30]
    assert _numbers(_text(f"{path}.1")) == [21, 22, 23, 24, 25]
    assert _numbers(_text(f"{path}.2")) == [16, 17, 18, 19, 20]
    assert _numbers(_text(f"{path}.3")) == [11, 12, 13, 14, 15]
    assert not Path(f"{path}.4").exists()


def test_two_files_keep_a_single_archive(tmp_path, make_logger):
    path = tmp_path / "app.log"
    log = make_logger()
    sink = log.set_level_sink(LogLevel.INFO, path, Policy.MAX_SIZE, 1, 200)
    assert sink.max_archive_count == 2

    for i in range(1, 10):
        log.info(_message(i))
    log.flush()

    assert Path(f"{path}.1").exists()
    assert not Path(f"{path}.2").exists()
    assert _numbers(_text(f"{path}.1")) + _numbers(_text(path)) == [7, 8, 9]


def test_rotation_restamps_creation_date(tmp_path, clock):
    sink = FileSink(tmp_path / "app.log", Policy.MAX_SIZE, 3, 10, clock=clock)
    try:
        sink.write_raw("x" * 20)
        clock.advance(days=2)
        assert rotate_by_size(sink)
        assert sink.creation_date == "20261018"
        assert sink.file_size() == 0
        assert not sink.stream.closed
    finally:
        sink.close()


def test_rotation_visible_through_every_aliased_level(tmp_path, make_logger):
    path = tmp_path / "shared.log"
    log = make_logger()
    log.set_level_sink(LogLevel.INFO, path, Policy.MAX_SIZE, 4, 500)
    log.set_level_sink(LogLevel.ERROR, path)

    for i in range(1, 6):
        log.info(_message(i))
    stream_before = log.sink_for(LogLevel.ERROR).stream

    log.error("triggers rotation")
    log.flush()

    assert log.sink_for(LogLevel.INFO).stream is log.sink_for(LogLevel.ERROR).stream
    assert log.sink_for(LogLevel.ERROR).stream is not stream_before
    assert "triggers rotation" in _text(path)
    assert "triggers rotation" not in _text(f"{path}.1")


def _chain(exc: BaseException):
    while exc is not None:
        yield exc
        exc = exc.__cause__ or exc.__context__


def test_failed_reopen_detaches_until_the_file_opens_again(tmp_path, clock, monkeypatch):
    path = tmp_path / "app.log"
    sink = FileSink(path, Policy.MAX_SIZE, 3, 10, clock=clock)
    sink.write_raw("x" * 20)

    def refuse_rename(src, dst):
        raise OSError("rename refused")

    def refuse_open():
        raise SinkOpenError(sink.path, reason="Permission denied")

    monkeypatch.setattr(rotation.os, "replace", refuse_rename)
    monkeypatch.setattr(sink, "_open", refuse_open)
    try:
        with pytest.raises(SinkOpenError) as exc_info:
            sink.write_entry("INFO: ", "lost")
        assert "rename refused" in [str(e) for e in _chain(exc_info.value)]
        assert sink.detached
        assert sink.file_size() == 0

        # Still unopenable: the line is dropped, nothing raises
        sink.write_entry("INFO: ", "dropped")

        monkeypatch.undo()
        sink.write_entry("INFO: ", "back")
        assert not sink.detached
    finally:
        sink.close()

    assert _text(f"{path}.1") == "x" * 20
    active = _text(path)
    assert active.endswith("INFO: back")
    assert "lost" not in active and "dropped" not in active
