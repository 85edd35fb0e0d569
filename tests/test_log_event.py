from dataclasses import replace

import pytest

from cassobee.log_event import LogEvent, LogLevel


def test_levels_are_ordered_by_severity():
    levels = [LogLevel(value) for value in range(len(LogLevel))]
    assert levels == sorted(levels)
    assert levels[0] is LogLevel.TRACE
    assert levels[-1] is LogLevel.FATAL


def test_level_values_follow_declaration_order():
    names = ["TRACE", "DEBUG", "INFO", "WARN", "ERROR", "FATAL"]
    assert [LogLevel(value).name for value in range(len(names))] == names


def test_level_lookup_by_value_and_name():
    assert LogLevel(LogLevel.WARN.value) is LogLevel.WARN
    assert LogLevel["ERROR"] is LogLevel.ERROR
    with pytest.raises(ValueError):
        LogLevel(len(LogLevel))


def test_event_defaults_are_empty():
    event = LogEvent()
    assert event.content == ""
    assert event.process_name == ""
    assert event.line == 0
    assert event.threadid == 0


def test_event_fields_round_trip():
    event = LogEvent(process_name="proc", filename="a.py", line=12, content="hello")
    copy = replace(event, content="other")
    assert copy.process_name == "proc"
    assert copy.line == 12
    assert copy.content == "other"
    assert event.content == "hello"
    assert replace(copy, content="hello") == event