"""Growable sequence stored in fixed-size blocks."""

from __future__ import annotations

from itertools import chain
from typing import Any, Iterator

ITEMS_PER_BLOCK = 128
DEFAULT_BLOCK_COUNT = 16


class BlockList:
    """Zero-filled sequence that grows block by block when a position is touched."""

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        self._blocks: list[list[Any]] = []
        if size == 0:
            self._allocate(DEFAULT_BLOCK_COUNT)
        else:
            self._allocate(-(-size // ITEMS_PER_BLOCK))

    def _allocate(self, count: int) -> None:
        self._blocks.extend([0] * ITEMS_PER_BLOCK for _ in range(count))

    def _resize(self, size: int) -> None:
        if size <= self.max_size():
            return
        self._allocate(size // ITEMS_PER_BLOCK + 1 - len(self._blocks))

    def _locate(self, pos: int) -> tuple[list[Any], int]:
        if pos < 0:
            raise IndexError(f"position must not be negative, got {pos}")
        self._resize(pos + 1)
        which, idx = divmod(pos, ITEMS_PER_BLOCK)
        return self._blocks[which], idx

    def insert(self, pos: int, value: Any) -> None:
        """Store ``value`` at ``pos``, growing as needed."""
        block, idx = self._locate(pos)
        block[idx] = value

    def __getitem__(self, pos: int) -> Any:
        block, idx = self._locate(pos)
        return block[idx]

    def __setitem__(self, pos: int, value: Any) -> None:
        self.insert(pos, value)

    def max_size(self) -> int:
        """Number of slots currently allocated."""
        return len(self._blocks) * ITEMS_PER_BLOCK

    def __iter__(self) -> Iterator[Any]:
        return chain.from_iterable(self._blocks)