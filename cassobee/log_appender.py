"""Log appenders: console, date-rotated file, and buffered asynchronous file output."""

from __future__ import annotations

import abc
import logging
import os
import sys
import threading
import time
from datetime import datetime, timedelta
from enum import IntEnum
from typing import BinaryIO, Callable, Optional

from cassobee.log_event import LogEvent, LogLevel
from cassobee.log_formatter import LogFormatter
from cassobee.ring_buffer import RingBuffer

_log = logging.getLogger(__name__)

DEFAULT_PATTERN = "%d{%Y-%m-%d %H:%M:%S}%T%p%T%c%T%t%T%f:%l%T%m%n"
ASYNC_BUFFER_SIZE = 4096 * 128
DEFAULT_INTERVAL = 1000
DEFAULT_THRESHOLD = 4096


class LogAppender(abc.ABC):
    """Destination for formatted log records."""

    def __init__(self, pattern: str = DEFAULT_PATTERN) -> None:
        self.formatter = LogFormatter(pattern)
        self._lock = threading.Lock()

    @abc.abstractmethod
    def log(self, level: LogLevel, event: LogEvent) -> None:
        """Write ``event`` at ``level``."""

    def close(self) -> None:
        """Release whatever the appender holds."""


class ConsoleAppender(LogAppender):
    """Writes formatted records to standard output."""

    def log(self, level: LogLevel, event: LogEvent) -> None:
        msg = self.formatter.format(level, event)
        with self._lock:
            sys.stdout.write(msg)
            sys.stdout.flush()


class RotateType(IntEnum):
    HOUR = 0
    DAY = 1


class TimeRotater:
    """Decides when a log file is rotated and what suffix the new file gets."""

    def __init__(
        self,
        rotate_type: RotateType = RotateType.DAY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rotate_type = RotateType(rotate_type)
        self._clock = clock
        self.suffix = ""
        self.next_rotate_time = 0.0
        self.is_rotate()

    def update(self, curtime: float) -> bool:
        """Recompute the suffix and the next rotation time from ``curtime``."""
        now = datetime.fromtimestamp(curtime)
        if self.rotate_type == RotateType.HOUR:
            self.suffix = now.strftime("%Y%m%d%H")
            start = now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        elif self.rotate_type == RotateType.DAY:
            self.suffix = now.strftime("%Y%m%d")
            start = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
        else:
            raise ValueError(f"unknown rotate_type: {self.rotate_type}")
        self.next_rotate_time = start.timestamp()
        return True

    def is_rotate(self) -> bool:
        """True (after updating) once the next rotation time has been reached."""
        curtime = self._clock()
        if curtime < self.next_rotate_time:
            return False
        return self.update(curtime)


class FileAppender(LogAppender):
    """Appends records to ``<logdir>/<filename>.<suffix>.log``, rotated daily."""

    def __init__(self, logdir: str, filename: str, pattern: str = DEFAULT_PATTERN) -> None:
        super().__init__(pattern)
        self.rotater = TimeRotater(RotateType.DAY)
        self.filedir = logdir or "."
        self.filename = filename
        self.filepath = ""
        self._stream: Optional[BinaryIO] = None
        self._running = False
        try:
            os.makedirs(self.filedir, exist_ok=True)
        except OSError as exc:
            _log.error("mkdir failed, dir:%s err:%s", self.filedir, exc)
            return
        self.reopen()
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    def reopen(self) -> bool:
        """Close the current file and open the one named by the rotater's suffix."""
        self.filepath = f"{self.filedir}/{self.filename}.{self.rotater.suffix}.log"
        if self._stream is not None:
            self._stream.close()
        self._stream = open(self.filepath, "ab")
        _log.info("open filestream %s", self.filepath)
        return True

    def log(self, level: LogLevel, event: LogEvent) -> None:
        if not self._running:
            return
        data = self.formatter.format(level, event).encode("utf-8")
        with self._lock:
            if not self._running or self._stream is None:
                return
            if self.rotater.is_rotate():
                self.reopen()
            self._stream.write(data)
            self._stream.flush()

    def close(self) -> None:
        with self._lock:
            self._running = False
            if self._stream is not None:
                self._stream.close()
                self._stream = None

    def __enter__(self) -> "FileAppender":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncAppender(FileAppender):
    """Buffers records in memory; a background thread writes them to the file."""

    def __init__(
        self,
        logdir: str,
        filename: str,
        pattern: str = DEFAULT_PATTERN,
        interval: int = DEFAULT_INTERVAL,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        super().__init__(logdir, filename, pattern)
        self.interval = interval
        self.threshold = threshold
        self._cond = threading.Condition(self._lock)
        self._buf = RingBuffer(ASYNC_BUFFER_SIZE)
        self._thread: Optional[threading.Thread] = None
        if self._stream is not None:
            self.start()

    def log(self, level: LogLevel, event: LogEvent) -> None:
        if not self._running:
            return
        data = self.formatter.format(level, event).encode("utf-8")
        with self._cond:
            if not self._running:
                return
            written = self._buf.write(data)
            if written != len(data):
                _log.warning(
                    "log lost!!! message size:%d real write size:%d.", len(data), written
                )
            if len(self._buf) >= self.threshold:
                self._cond.notify()

    def _flush_locked(self) -> None:
        if self._buf.empty() or self._stream is None:
            return
        if self.rotater.is_rotate():
            self.reopen()
        self._buf.read_into(self._stream, len(self._buf))
        self._stream.flush()

    def _run(self) -> None:
        timeout = self.interval / 1000 if self.interval > 0 else None
        while True:
            with self._cond:
                self._cond.wait_for(
                    lambda: len(self._buf) >= self.threshold or not self._running,
                    timeout,
                )
                self._flush_locked()
                if not self._running:
                    return

    def start(self) -> None:
        """Start the writer thread."""
        with self._cond:
            if self._thread is not None:
                return
            self._running = True
            self._thread = threading.Thread(target=self._run, name="async-appender", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop accepting records, write what is buffered and join the writer."""
        with self._cond:
            if not self._running and self._thread is None:
                return
            self._running = False
            self._cond.notify_all()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def close(self) -> None:
        self.stop()
        super().close()