"""Process-side logging front end: formats records and routes them."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional, Protocol

from cassobee.log_appender import DEFAULT_PATTERN, ConsoleAppender
from cassobee.log_event import LogEvent, LogLevel
from cassobee.log_manager import LogManager
from cassobee.logger import Logger

_log = logging.getLogger(__name__)

CONTENT_LIMIT = 2047
LOGSERVER_NAME = "logserver"

_PROCESS_START = time.monotonic()


def process_elapse() -> int:
    """Milliseconds since this module was loaded."""
    return int((time.monotonic() - _PROCESS_START) * 1000)


class LogServer(Protocol):
    def is_connect(self) -> bool: ...

    def send(self, level: LogLevel, event: LogEvent) -> bool: ...


class LogClient:
    """Builds log events and sends them to a log server, the console or a local manager."""

    def __init__(
        self,
        loglevel: LogLevel = LogLevel.TRACE,
        pattern: str = DEFAULT_PATTERN,
        manager: Optional[LogManager] = None,
    ) -> None:
        self.loglevel = LogLevel(loglevel)
        self.console_logger = Logger(self.loglevel, ConsoleAppender(pattern))
        self.manager = manager if manager is not None else LogManager(fallback=self.console_logger)
        self.process_name = ""
        self.is_logserver = False
        self.logserver: Optional[LogServer] = None

    def _event(self, filename: str, line: int, fmt: str, args: tuple) -> LogEvent:
        content = fmt % args if args else fmt
        return LogEvent(
            process_name=self.process_name,
            filename=filename,
            line=line,
            timestamp=time.time(),
            threadid=threading.get_native_id(),
            fiberid=0,
            elapse=str(process_elapse()),
            content=content[:CONTENT_LIMIT],
        )

    def glog(self, level: LogLevel, filename: str, line: int, fmt: str, *args: object) -> None:
        """Log a printf-style message if ``level`` reaches the client's level."""
        if level < self.loglevel:
            return
        self.send(LogLevel(level), self._event(filename, line, fmt, args))

    def console_log(
        self, level: LogLevel, filename: str, line: int, fmt: str, *args: object
    ) -> None:
        """Print a printf-style message on the console, whatever the level."""
        self.console_logger.log(LogLevel(level), self._event(filename, line, fmt, args))

    def set_process_name(self, process_name: str) -> None:
        if process_name == LOGSERVER_NAME:
            self.is_logserver = True
            _log.info("i am logserver!!!")
        self.process_name = process_name

    def set_logserver(self, logserver: Optional[LogServer]) -> None:
        self.logserver = logserver

    def send(self, level: LogLevel, event: LogEvent) -> None:
        """Route an event: local manager, connected log server, or console."""
        if self.is_logserver:
            self.manager.log(level, event)
            return
        if self.logserver is not None and self.logserver.is_connect():
            self.logserver.send(level, event)
        else:
            self.console_logger.log(level, event)