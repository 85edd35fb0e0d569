"""Log severity levels and the record passed to formatters and appenders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log record, in increasing order."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


@dataclass
class LogEvent:
    """One log record with its origin and message."""

    process_name: str = ""
    filename: str = ""
    line: int = 0
    timestamp: float = 0
    threadid: int = 0
    fiberid: int = 0
    elapse: str = ""
    content: str = ""