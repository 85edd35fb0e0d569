"""Thread pool whose tasks hand back futures."""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable

_log = logging.getLogger(__name__)


class AsyncThreadPool:
    """Fixed number of workers serving one queue; each task yields a Future."""

    def __init__(self, threads_count: int) -> None:
        if threads_count < 0:
            raise ValueError(f"threads_count must not be negative, got {threads_count}")
        self._threads_count = threads_count
        self._workers: list[threading.Thread] = []
        self._tasks: deque[Callable[[], None]] = deque()
        self._stopped = True
        self._busy = 0
        self._cond = threading.Condition()

    def init(self) -> None:
        """Start the worker threads."""
        with self._cond:
            self._stopped = False
        for n in range(self._threads_count):
            worker = threading.Thread(target=self._run, name=f"async-worker{n}", daemon=True)
            worker.start()
            self._workers.append(worker)

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopped or bool(self._tasks))
                if self._stopped and not self._tasks:
                    return
                job = self._tasks.popleft()
                self._busy += 1
            try:
                job()
            except Exception:
                _log.error("task run throw exception!!!", exc_info=True)
            with self._cond:
                self._busy -= 1
                if self._busy == 0 and not self._tasks:
                    self._cond.notify_all()

    def add_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a Future for its result."""
        future: Future = Future()

        def job() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._cond:
            if self._stopped:
                raise RuntimeError("add_task on stopped threadpool")
            self._tasks.append(job)
            self._cond.notify()
        return future

    def stop(self) -> None:
        """Refuse new tasks, let workers finish the queue and join them."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()
        with self._cond:
            self._workers.clear()

    def wait_for_all_done(self, millisecond: float = 0) -> bool:
        """Wait until the queue is empty; a non-positive timeout waits forever."""
        with self._cond:
            if not self._tasks:
                return True
            if millisecond <= 0:
                self._cond.wait_for(lambda: not self._tasks)
                return True
            return self._cond.wait_for(lambda: not self._tasks, timeout=millisecond / 1000)