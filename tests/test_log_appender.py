from datetime import datetime

import pytest

from cassobee.log_appender import (
    AsyncAppender,
    ConsoleAppender,
    FileAppender,
    LogAppender,
    RotateType,
    TimeRotater,
)
from cassobee.log_event import LogEvent, LogLevel


def test_log_appender_is_abstract():
    with pytest.raises(TypeError):
        LogAppender("%m")


def test_console_appender_prints_formatted(capsys):
    appender = ConsoleAppender("%p:%m%n")
    appender.log(LogLevel.INFO, LogEvent(content="hello"))
    assert capsys.readouterr().out == "INFO:hello\n"


def test_time_rotater_day():
    start = datetime(2024, 3, 5, 13, 30)
    now = [start.timestamp()]
    rotater = TimeRotater(RotateType.DAY, clock=lambda: now[0])
    assert rotater.suffix == start.strftime("%Y%m%d")
    assert rotater.next_rotate_time == datetime(2024, 3, 6).timestamp()
    assert rotater.is_rotate() is False
    now[0] = rotater.next_rotate_time
    assert rotater.is_rotate() is True
    assert rotater.suffix == datetime(2024, 3, 6).strftime("%Y%m%d")


def test_time_rotater_hour():
    start = datetime(2024, 3, 5, 13, 30)
    rotater = TimeRotater(RotateType.HOUR, clock=lambda: start.timestamp())
    assert rotater.suffix == start.strftime("%Y%m%d%H")
    assert rotater.next_rotate_time == datetime(2024, 3, 5, 14).timestamp()


def test_time_rotater_unknown_type():
    with pytest.raises(ValueError):
        TimeRotater(7)


def test_file_appender_writes(tmp_path):
    appender = FileAppender(str(tmp_path), "app", "%m%n")
    appender.log(LogLevel.INFO, LogEvent(content="hello"))
    appender.close()
    expected = tmp_path / f"app.{appender.rotater.suffix}.log"
    assert expected.read_text() == "hello\n"
    assert expected.samefile(appender.filepath)


def test_file_appender_ignores_after_close(tmp_path):
    appender = FileAppender(str(tmp_path), "app", "%m%n")
    appender.log(LogLevel.INFO, LogEvent(content="one"))
    appender.close()
    appender.log(LogLevel.INFO, LogEvent(content="two"))
    assert (tmp_path / f"app.{appender.rotater.suffix}.log").read_text() == "one\n"


def test_file_appender_rotates(tmp_path):
    start = datetime(2024, 3, 5, 23, 59).timestamp()
    now = [start]
    appender = FileAppender(str(tmp_path), "app", "%m%n")
    appender.rotater = TimeRotater(RotateType.DAY, clock=lambda: now[0])
    appender.reopen()
    appender.log(LogLevel.INFO, LogEvent(content="first"))
    now[0] = appender.rotater.next_rotate_time
    appender.log(LogLevel.INFO, LogEvent(content="second"))
    appender.close()
    first = tmp_path / f"app.{datetime.fromtimestamp(start).strftime('%Y%m%d')}.log"
    second = tmp_path / f"app.{datetime.fromtimestamp(now[0]).strftime('%Y%m%d')}.log"
    assert first != second
    assert first.read_text() == "first\n"
    assert second.read_text() == "second\n"


def test_file_appender_empty_dir_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    appender = FileAppender("", "app", "%m%n")
    appender.log(LogLevel.INFO, LogEvent(content="here"))
    appender.close()
    assert (tmp_path / f"app.{appender.rotater.suffix}.log").read_text() == "here\n"


def test_file_appender_bad_dir_not_running(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    appender = FileAppender(str(blocker / "sub"), "app", "%m%n")
    assert appender.running is False
    appender.log(LogLevel.INFO, LogEvent(content="lost"))
    assert appender.filepath == ""


def test_async_appender_writes_in_order(tmp_path):
    appender = AsyncAppender(str(tmp_path), "async", "%m%n", interval=20, threshold=1)
    for content in ("a", "b", "c"):
        appender.log(LogLevel.INFO, LogEvent(content=content))
    appender.close()
    path = tmp_path / f"async.{appender.rotater.suffix}.log"
    assert path.read_text() == "a\nb\nc\n"


def test_async_appender_flushes_below_threshold_on_stop(tmp_path):
    appender = AsyncAppender(str(tmp_path), "async", "%m", interval=10000, threshold=10**6)
    appender.log(LogLevel.WARN, LogEvent(content="pending"))
    appender.stop()
    appender.log(LogLevel.WARN, LogEvent(content="dropped"))
    appender.close()
    path = tmp_path / f"async.{appender.rotater.suffix}.log"
    assert path.read_text() == "pending"