"""Dictionary guarded by left-right concurrency control."""

from __future__ import annotations

from typing import Any, Generic, Hashable, TypeVar

from cassobee.left_right import LeftRight

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRMap(Generic[K, V]):
    """Mapping with wait-free reads and serialised writes."""

    def __init__(self) -> None:
        self._lr: LeftRight[dict] = LeftRight(dict)

    def emplace(self, key: K, value: V) -> None:
        """Insert ``key`` unless it is already present."""
        self._lr.apply_write(lambda d: d.setdefault(key, value))

    def erase(self, key: K) -> None:
        self._lr.apply_write(lambda d: d.pop(key, None))

    def clear(self) -> None:
        self._lr.apply_write(lambda d: d.clear())

    def find(self, key: K) -> Any:
        """Value stored under ``key``, or None."""
        return self._lr.apply_read(lambda d: d.get(key))

    def __getitem__(self, key: K) -> V:
        return self._lr.apply_read(lambda d: d[key])

    def __contains__(self, key: object) -> bool:
        return self._lr.apply_read(lambda d: key in d)

    def count(self, key: K) -> int:
        return self._lr.apply_read(lambda d: 1 if key in d else 0)

    def empty(self) -> bool:
        return self._lr.apply_read(lambda d: not d)

    def __len__(self) -> int:
        return self._lr.apply_read(len)