"""Grouped worker-thread pool with per-thread essential tasks and optional stealing."""

from __future__ import annotations

import logging
import random
import re
import threading
from collections import deque
from typing import Callable, Iterable, Optional, Union

_log = logging.getLogger(__name__)

Task = Callable[[], object]

_thread_state = threading.local()


def _essential_queue() -> deque:
    """The calling thread's queue of essential tasks."""
    queue = getattr(_thread_state, "essential", None)
    if queue is None:
        queue = deque()
        _thread_state.essential = queue
    return queue


class ThreadPoolError(RuntimeError):
    """Raised when a task cannot be queued."""


def parse_groups(text: str) -> list[tuple[int, int]]:
    """Parse ``"(maxsize, threads) (maxsize, threads) ..."`` into pairs."""
    tokens = [token for token in re.split(r"[(,)\s]+", text) if token]
    if not tokens or len(tokens) % 2:
        raise ValueError(f"malformed thread group description: {text!r}")
    numbers = [int(token) for token in tokens]
    return list(zip(numbers[::2], numbers[1::2]))


class ThreadGroup:
    """A bounded task queue served by its own worker threads."""

    def __init__(
        self,
        pool: Optional["ThreadPool"],
        idx: int,
        maxsize: int,
        threadcnt: int,
    ) -> None:
        if maxsize < 0 or threadcnt < 0:
            raise ValueError("maxsize and threadcnt must not be negative")
        self.pool = pool
        self.idx = idx
        self.maxsize = maxsize
        self.threadcnt = threadcnt
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._tasks: deque[Task] = deque()
        self._stopped = False
        self._busy = 0
        self._threads = [
            threading.Thread(target=self._run, name=f"group{idx}-worker{n}", daemon=True)
            for n in range(threadcnt)
        ]
        for thread in self._threads:
            thread.start()

    def _take_task(self) -> Optional[Task]:
        with self._cond:
            while not self.has_task():
                if self._stopped:
                    return None
                if self.pool is not None and self.pool.is_steal():
                    self._cond.release()
                    try:
                        stolen = self.pool.try_steal_one(self.idx)
                    finally:
                        self._cond.acquire()
                    if stolen is not None:
                        return stolen
                self._cond.wait_for(lambda: self._stopped or self.has_task())
            essential = _essential_queue()
            if essential:
                return essential.popleft()
            return self._tasks.popleft()

    def _run(self) -> None:
        while True:
            task = self._take_task()
            if task is None:
                return
            with self._cond:
                self._busy += 1
            try:
                task()
            except Exception:
                _log.error("thread_task run throw exception!!!", exc_info=True)
            with self._cond:
                self._busy -= 1
                if self._busy == 0 and not self.has_task():
                    self._cond.notify_all()

    def _steal_task(self) -> Optional[Task]:
        if not self._lock.acquire(blocking=False):
            return None
        try:
            if not self._tasks:
                return None
            task = self._tasks.popleft()
            if self._tasks:
                self._cond.notify()
            else:
                self._cond.notify_all()
            return task
        finally:
            self._lock.release()

    def add_task(self, task: Task) -> None:
        """Queue ``task``; raise ThreadPoolError if full or stopped."""
        with self._cond:
            if len(self._tasks) >= self.maxsize:
                raise ThreadPoolError("task_queue is full!!!")
            if self._stopped:
                raise ThreadPoolError("add task to a stopped thread group.")
            self._tasks.append(task)
            self._cond.notify()

    def has_task(self) -> bool:
        """Whether the calling thread's essential queue or this group's queue holds work."""
        return bool(_essential_queue()) or bool(self._tasks)

    def notify_one(self) -> None:
        with self._cond:
            self._cond.notify()

    def wait_for_all_done(self, millisecond: float = 0) -> bool:
        """Wait until no task is queued; a non-positive timeout waits forever."""
        with self._cond:
            if not self.has_task():
                return True
            if millisecond <= 0:
                self._cond.wait_for(lambda: not self.has_task())
                return True
            return self._cond.wait_for(lambda: not self.has_task(), timeout=millisecond / 1000)

    def stop(self) -> None:
        """Stop accepting tasks, let the workers drain the queue and join them."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()
        self._threads.clear()


class ThreadPool:
    """A set of thread groups addressed by index."""

    def __init__(self) -> None:
        self._stopped = True
        self._steal = False
        self._groups: list[Optional[ThreadGroup]] = []

    def start(
        self,
        groups: Union[str, Iterable[tuple[int, int]]],
        steal: bool = False,
    ) -> None:
        """Start one group per ``(maxsize, threadcnt)`` pair."""
        if isinstance(groups, str):
            pairs = parse_groups(groups)
        else:
            pairs = [(int(maxsize), int(threadcnt)) for maxsize, threadcnt in groups]
        if not pairs:
            raise ValueError("at least one thread group is required")
        if len(self._groups) < len(pairs):
            self._groups.extend([None] * (len(pairs) - len(self._groups)))
        for idx, (maxsize, threadcnt) in enumerate(pairs):
            if self._groups[idx] is None:
                self._groups[idx] = ThreadGroup(self, idx, maxsize, threadcnt)
                _log.info(
                    "thread group %d run %d threads, task queue maxsize:%d.",
                    idx, threadcnt, maxsize,
                )
            else:
                _log.info("thread group %d already start.", idx)
        self._steal = bool(steal)
        if self._steal:
            _log.info("threadpool enable steal task.")
        self._stopped = False

    def stop(self) -> None:
        """Finish queued work in every group and shut the groups down."""
        self._stopped = True
        for group in self._groups:
            if group is not None and group.wait_for_all_done(0):
                group.stop()
        self._groups.clear()

    def add_task(self, groupidx: int, task: Task) -> bool:
        """Queue ``task`` on group ``groupidx``; False if the pool is stopped."""
        if self._stopped:
            _log.info("threadpool is stopped, add_task failed.")
            return False
        if not 0 <= groupidx < len(self._groups):
            raise IndexError(f"thread group index {groupidx} out of range")
        group = self._groups[groupidx]
        if group is None:
            raise IndexError(f"thread group {groupidx} is not started")
        group.add_task(task)
        return True

    def add_essential_task(self, task: Task) -> bool:
        """Queue ``task`` on the calling thread's essential queue."""
        if self._stopped:
            _log.info("threadpool is stopped, add_essential_task failed.")
            return False
        _essential_queue().append(task)
        return True

    def is_steal(self) -> bool:
        return self._steal

    def try_steal_one(self, current_idx: int) -> Optional[Task]:
        """Take one queued task from another group, or None."""
        groups = list(self._groups)
        count = len(groups)
        if count == 0:
            return None
        offset = random.randint(0, count - 1)
        for step in range(count):
            idx = (offset + step) % count
            if idx == current_idx:
                continue
            group = groups[idx]
            if group is None:
                continue
            task = group._steal_task()
            if task is not None:
                _log.info("thread group %d steal group %d task success.", current_idx, group.idx)
                return task
        return None