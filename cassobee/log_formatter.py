"""Pattern-driven rendering of log events.

Pattern directives:
    %m  message content         %p  level name
    %r  process elapsed time    %c  process name
    %t  thread id               %n  newline
    %d  date/time, %d{strftime} %f  file name
    %l  line number             %T  tab
    %F  fiber id                %%  a literal percent sign
"""

from __future__ import annotations

import re
import time
from typing import Callable, Optional

from cassobee.log_event import LogEvent, LogLevel

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
PATTERN_ERROR = "<<pattern_error>>"

Item = Callable[[int, LogEvent], str]

_DIRECTIVE = re.compile(r"([A-Za-z}]*)(?:\{([^}]*)\})?")


def _level_name(level: int) -> str:
    try:
        return LogLevel(level).name
    except ValueError:
        return "UNKNOWN"


def _datetime_item(fmt: str) -> Item:
    fmt = fmt or DEFAULT_DATETIME_FORMAT
    return lambda level, event: time.strftime(fmt, time.localtime(event.timestamp))


def _literal_item(text: str) -> Item:
    return lambda level, event: text


_ITEM_FACTORIES: dict[str, Callable[[str], Item]] = {
    "m": lambda fmt: (lambda level, event: str(event.content)),
    "p": lambda fmt: (lambda level, event: _level_name(level)),
    "r": lambda fmt: (lambda level, event: str(event.elapse)),
    "c": lambda fmt: (lambda level, event: str(event.process_name)),
    "t": lambda fmt: (lambda level, event: str(event.threadid)),
    "n": lambda fmt: _literal_item("\n"),
    "d": _datetime_item,
    "f": lambda fmt: (lambda level, event: str(event.filename)),
    "l": lambda fmt: (lambda level, event: str(event.line)),
    "T": lambda fmt: _literal_item("\t"),
    "F": lambda fmt: (lambda level, event: str(event.fiberid)),
}


class LogFormatter:
    """Turns a level and a LogEvent into text according to a pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.error = False
        self._items: list[Item] = []
        self._parse(pattern)

    def _parse(self, pattern: str) -> None:
        text: list[str] = []

        def flush() -> None:
            if text:
                self._items.append(_literal_item("".join(text)))
                text.clear()

        pos = 0
        size = len(pattern)
        while pos < size:
            ch = pattern[pos]
            if ch != "%":
                text.append(ch)
                pos += 1
                continue
            if pattern.startswith("%%", pos):
                text.append("%")
                pos += 2
                continue
            match = _DIRECTIVE.match(pattern, pos + 1)
            key, fmt = match.group(1), match.group(2)
            end = match.end()
            flush()
            if fmt is None and end < size and pattern[end] == "{":
                # an opening brace that is never closed
                self.error = True
                self._items.append(_literal_item(PATTERN_ERROR))
                pos += 1
                continue
            self._items.append(self._make_item(key, fmt or ""))
            pos = end
        flush()

    def _make_item(self, key: str, fmt: str) -> Item:
        factory: Optional[Callable[[str], Item]] = _ITEM_FACTORIES.get(key)
        if factory is None:
            self.error = True
            return _literal_item(f"<<error_format %{key}>>")
        return factory(fmt)

    def format(self, level: int, event: LogEvent) -> str:
        """Render ``event`` at ``level``."""
        return "".join(item(level, event) for item in self._items)