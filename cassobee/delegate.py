"""Single-target and multicast delegates."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Hashable, Iterator

_log = logging.getLogger(__name__)


class Delegate:
    """Holds at most one callable and invokes it on request."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._executor: Callable[..., Any] | None = None

    def bind(self, executor: Callable[..., Any]) -> bool:
        """Bind ``executor`` unless something is already bound."""
        with self._lock:
            if self._executor is not None:
                return False
            self._executor = executor
            return True

    def force_bind(self, executor: Callable[..., Any]) -> None:
        with self._lock:
            self._executor = executor

    def unbind(self) -> bool:
        with self._lock:
            if self._executor is None:
                return False
            self._executor = None
            return True

    def is_bound(self) -> bool:
        with self._lock:
            return self._executor is not None

    def execute(self, *args: Any) -> Any:
        with self._lock:
            executor = self._executor
        if executor is None:
            raise RuntimeError("execute on an unbound delegate")
        return executor(*args)


class ListStorage:
    """Ordered key/value pairs; keys may repeat."""

    def __init__(self) -> None:
        self._items: list[tuple[Hashable, Any]] = []

    def add(self, key: Hashable, value: Any) -> None:
        self._items.append((key, value))

    def delete(self, key: Hashable) -> None:
        self._items = [(k, v) for k, v in self._items if k != key]

    def __iter__(self) -> Iterator[tuple[Hashable, Any]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class MapStorage:
    """Key/value pairs with unique keys, iterated in key order."""

    def __init__(self) -> None:
        self._items: dict[Hashable, Any] = {}

    def add(self, key: Hashable, value: Any) -> None:
        self._items.setdefault(key, value)

    def delete(self, key: Hashable) -> None:
        self._items.pop(key, None)

    def __iter__(self) -> Iterator[tuple[Hashable, Any]]:
        return iter(sorted(self._items.items(), key=lambda kv: kv[0]))

    def __len__(self) -> int:
        return len(self._items)


class MulticastDelegate:
    """Calls every bound callable; each binding is known by an integer id."""

    def __init__(self, storage: ListStorage | MapStorage | None = None) -> None:
        self._lock = threading.Lock()
        self._storage = storage if storage is not None else ListStorage()
        self._max_id = 0

    def bind(self, executor: Callable[..., None]) -> int:
        with self._lock:
            delegate_id = self._max_id
            self._max_id += 1
            self._storage.add(delegate_id, executor)
            return delegate_id

    def unbind(self, delegate_id: int) -> None:
        with self._lock:
            self._storage.delete(delegate_id)

    def is_bound(self) -> bool:
        with self._lock:
            return len(self._storage) > 0

    def broadcast(self, *args: Any) -> None:
        """Call every executor; an exception in one does not stop the rest."""
        with self._lock:
            executors = [executor for _, executor in self._storage]
        for executor in executors:
            try:
                executor(*args)
            except Exception:
                _log.error("multicast_delegate broadcast throw exception!!!", exc_info=True)