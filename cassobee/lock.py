"""Lock primitives: a no-op lock, spin locks and a reader/writer lock."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Iterator


class EmptyLock:
    """Lock that never blocks; for code paths that need no synchronisation.

    It only counts how deeply it is held, so callers can still see whether
    lock and unlock calls are balanced.
    """

    def __init__(self) -> None:
        self._depth = 0

    def lock(self) -> None:
        self._depth += 1

    def unlock(self) -> None:
        if self._depth > 0:
            self._depth -= 1

    def try_lock(self) -> bool:
        self.lock()
        return True

    def locked(self) -> bool:
        return self._depth > 0

    def __enter__(self) -> "EmptyLock":
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


class _SpinBase:
    """Shared state of the spin locks: a single flag taken without blocking."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    def lock(self) -> None:
        """Retry the flag until it is taken."""
        while not self._flag.acquire(blocking=False):
            time.sleep(0)

    def try_lock(self) -> bool:
        """Take the lock if it is free; return whether it was taken."""
        return self._flag.acquire(blocking=False)

    def unlock(self) -> None:
        """Release the lock; releasing a free lock leaves it free."""
        try:
            self._flag.release()
        except RuntimeError:
            pass

    def locked(self) -> bool:
        return self._flag.locked()

    def __enter__(self) -> "_SpinBase":
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


class SpinLock(_SpinBase):
    """Spin lock that watches the flag and yields while it stays taken."""

    def __init__(self) -> None:
        super().__init__()

    def lock(self) -> None:
        while not self._flag.acquire(blocking=False):
            while self._flag.locked():
                time.sleep(0)

    def try_lock(self) -> bool:
        return super().try_lock()

    def unlock(self) -> None:
        super().unlock()

    def __enter__(self) -> "SpinLock":
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


class AtomicSpinLock(_SpinBase):
    """Spin lock that simply retries the flag until it is taken."""

    def __init__(self) -> None:
        super().__init__()

    def lock(self) -> None:
        while not self._flag.acquire(blocking=False):
            time.sleep(0)

    def try_lock(self) -> bool:
        return super().try_lock()

    def unlock(self) -> None:
        super().unlock()

    def __enter__(self) -> "AtomicSpinLock":
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()


class RWLock:
    """Reader/writer lock: many readers or a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def rdlock(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: not self._writer)
            self._readers += 1

    def try_rdlock(self) -> bool:
        with self._cond:
            if self._writer:
                return False
            self._readers += 1
            return True

    def wrlock(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            self._writer = True

    def try_wrlock(self) -> bool:
        with self._cond:
            if self._writer or self._readers:
                return False
            self._writer = True
            return True

    def unlock(self) -> None:
        """Release the write lock if held, otherwise one read lock."""
        with self._cond:
            if self._writer:
                self._writer = False
            elif self._readers:
                self._readers -= 1
            else:
                raise RuntimeError("unlock of an unlocked rwlock")
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator["RWLock"]:
        self.rdlock()
        try:
            yield self
        finally:
            self.unlock()

    @contextmanager
    def write_locked(self) -> Iterator["RWLock"]:
        self.wrlock()
        try:
            yield self
        finally:
            self.unlock()