"""Left-right concurrency control: wait-free reads over two copies of a value."""

from __future__ import annotations

import os
import threading
import time
from enum import IntEnum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_COUNTER_NUMS = 8


class Side(IntEnum):
    LEFT = 0
    RIGHT = 1


class AtomicCounterIndicator:
    """Read indicator backed by a single shared counter."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = 0

    def arrive(self) -> None:
        with self._lock:
            self._counter += 1

    def depart(self) -> None:
        with self._lock:
            self._counter -= 1

    def is_empty(self) -> bool:
        return self._counter == 0


class DistributedCounterIndicator:
    """Read indicator spread over several counters chosen by thread identity."""

    def __init__(self, counters: int | None = None) -> None:
        if counters is None:
            counters = os.cpu_count() or DEFAULT_COUNTER_NUMS
        if counters <= 0:
            raise ValueError(f"counters must be positive, got {counters}")
        self._counts = [0] * counters
        self._locks = [threading.Lock() for _ in range(counters)]

    def _slot(self) -> int:
        return threading.get_ident() % len(self._counts)

    def arrive(self) -> None:
        idx = self._slot()
        with self._locks[idx]:
            self._counts[idx] += 1

    def depart(self) -> None:
        idx = self._slot()
        with self._locks[idx]:
            self._counts[idx] -= 1

    def is_empty(self) -> bool:
        return not any(self._counts)


class LeftRight(Generic[T]):
    """Keeps two instances of a value; readers never wait for the writer."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._instances = (factory(), factory())
        self._indicators = (DistributedCounterIndicator(), DistributedCounterIndicator())
        self._version = 0
        self._side = Side.LEFT
        self._writer_lock = threading.Lock()

    def apply_read(self, func: Callable[..., Any], *args: Any) -> Any:
        """Call ``func(instance, *args)`` on the instance currently open to readers."""
        vi = self._version
        indicator = self._indicators[vi]
        indicator.arrive()
        try:
            return func(self._instances[self._side], *args)
        finally:
            indicator.depart()

    def apply_write(self, func: Callable[..., Any], *args: Any) -> Any:
        """Apply ``func`` to both instances in turn; return the second call's result."""
        with self._writer_lock:
            side = self._side
            other = Side(1 - side)
            func(self._instances[other], *args)
            self._side = other
            self._toggle_version_and_wait()
            return func(self._instances[side], *args)

    def _toggle_version_and_wait(self) -> None:
        prev = self._version
        nxt = 1 - prev
        while not self._indicators[nxt].is_empty():
            time.sleep(0)
        self._version = nxt
        while not self._indicators[prev].is_empty():
            time.sleep(0)