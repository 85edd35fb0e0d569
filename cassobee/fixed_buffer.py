"""Fixed-capacity linear byte buffer."""

from __future__ import annotations

from typing import BinaryIO


class FixedBuffer:
    """Linear byte buffer of fixed capacity; writes never overwrite."""

    def __init__(self, capacity: int = 4096) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._data = bytearray()

    @property
    def capacity(self) -> int:
        return self._capacity

    def write(self, data: bytes) -> int:
        """Append as much of ``data`` as fits; return the number of bytes written."""
        data = bytes(data)
        chunk = data[: self.free_space()]
        self._data += chunk
        return len(chunk)

    def _take(self, length: int) -> bytes:
        length = max(0, min(len(self._data), length))
        chunk = bytes(self._data[:length])
        del self._data[:length]
        return chunk

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes from the front."""
        return self._take(length)

    def read_into(self, stream: BinaryIO, length: int) -> int:
        """Move up to ``length`` bytes into ``stream``; return how many were moved."""
        chunk = self._take(length)
        if chunk:
            stream.write(chunk)
        return len(chunk)

    def reset(self) -> None:
        self._data.clear()

    def free_space(self) -> int:
        return self._capacity - len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def empty(self) -> bool:
        return not self._data