"""Logger that forwards events to a root appender and keeps named appenders."""

from __future__ import annotations

from typing import Any, Optional

from cassobee.log_event import LogEvent, LogLevel


def _close(appender: Any) -> None:
    close = getattr(appender, "close", None)
    if callable(close):
        close()


class Logger:
    """Sends every event to its root appender."""

    def __init__(self, level: LogLevel, appender: Any) -> None:
        self.level = LogLevel(level)
        self.root_appender = appender
        self._appenders: dict[str, Any] = {}

    def log(self, level: LogLevel, event: LogEvent) -> None:
        self.root_appender.log(level, event)

    def get_appender(self, name: str) -> Optional[Any]:
        return self._appenders.get(name)

    def add_appender(self, name: str, appender: Any) -> bool:
        """Register ``appender`` under ``name`` unless the name is taken."""
        if name in self._appenders:
            return False
        self._appenders[name] = appender
        return True

    def del_appender(self, name: str) -> bool:
        """Remove and close the appender called ``name``."""
        appender = self._appenders.pop(name, None)
        if appender is None:
            return False
        _close(appender)
        return True

    def clear_appenders(self) -> None:
        for appender in self._appenders.values():
            _close(appender)
        self._appenders.clear()