"""Server-side log sink that writes received records to files."""

from __future__ import annotations

from typing import Any, Optional

from cassobee.log_appender import (
    DEFAULT_INTERVAL,
    DEFAULT_PATTERN,
    DEFAULT_THRESHOLD,
    AsyncAppender,
    FileAppender,
)
from cassobee.log_event import LogEvent, LogLevel
from cassobee.logger import Logger


def _dispose(logger: Logger) -> None:
    close = getattr(logger.root_appender, "close", None)
    if callable(close):
        close()
    logger.clear_appenders()


class LogManager:
    """Routes records to a file logger, or to ``fallback`` until one is set up."""

    def __init__(self, fallback: Optional[Any] = None) -> None:
        self.fallback = fallback
        self._file_logger: Optional[Logger] = None
        self._loggers: dict[str, Logger] = {}

    @property
    def file_logger(self) -> Optional[Logger]:
        return self._file_logger

    def init(
        self,
        logdir: str = "",
        filename: str = "log",
        asynclog: bool = False,
        loglevel: LogLevel = LogLevel.TRACE,
        pattern: str = DEFAULT_PATTERN,
        interval: int = DEFAULT_INTERVAL,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> Logger:
        """Create the file logger, synchronous or asynchronous."""
        if self._file_logger is not None:
            _dispose(self._file_logger)
        if asynclog:
            appender = AsyncAppender(logdir, filename, pattern, interval, threshold)
        else:
            appender = FileAppender(logdir, filename, pattern)
        self._file_logger = Logger(LogLevel(loglevel), appender)
        return self._file_logger

    def log(self, level: LogLevel, event: LogEvent) -> None:
        if self._file_logger is None:
            if self.fallback is None:
                raise RuntimeError("log manager has neither a file logger nor a fallback")
            self.fallback.log(level, event)
            return
        self._file_logger.log(level, event)

    def get_logger(self, name: str) -> Optional[Logger]:
        return self._loggers.get(name)

    def add_logger(self, name: str, logger: Logger) -> bool:
        """Register ``logger`` under ``name`` unless the name is taken."""
        if name in self._loggers:
            return False
        self._loggers[name] = logger
        return True

    def del_logger(self, name: str) -> bool:
        """Remove the logger called ``name`` and close its appenders."""
        logger = self._loggers.pop(name, None)
        if logger is None:
            return False
        _dispose(logger)
        return True

    def close(self) -> None:
        """Close the file logger; later records go to the fallback."""
        if self._file_logger is not None:
            _dispose(self._file_logger)
            self._file_logger = None