"""Fixed-capacity circular byte buffer."""

from __future__ import annotations

from typing import BinaryIO, Iterator


class RingBuffer:
    """Circular byte buffer that never overwrites unread data."""

    def __init__(self, capacity: int = 4096) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._data = bytearray(capacity)
        self._write_cursor = 0
        self._read_cursor = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def write(self, data: bytes) -> int:
        """Append as much of ``data`` as fits; return the number of bytes written."""
        data = bytes(data)
        length = min(self.free_space(), len(data))
        written = 0
        while written < length:
            chunk = min(self._capacity - self._write_cursor, length - written)
            start = self._write_cursor
            self._data[start:start + chunk] = data[written:written + chunk]
            self._write_cursor = (start + chunk) % self._capacity
            written += chunk
        self._size += written
        return written

    def _drain(self, length: int) -> Iterator[bytes]:
        length = max(0, min(self._size, length))
        taken = 0
        while taken < length:
            chunk = min(self._capacity - self._read_cursor, length - taken)
            start = self._read_cursor
            yield bytes(self._data[start:start + chunk])
            self._read_cursor = (start + chunk) % self._capacity
            taken += chunk
            self._size -= chunk

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes from the front."""
        return b"".join(self._drain(length))

    def read_into(self, stream: BinaryIO, length: int) -> int:
        """Move up to ``length`` bytes into ``stream``; return how many were moved."""
        moved = 0
        for chunk in self._drain(length):
            stream.write(chunk)
            moved += len(chunk)
        return moved

    def reset(self) -> None:
        self._write_cursor = 0
        self._read_cursor = 0
        self._size = 0

    def free_space(self) -> int:
        return self._capacity - self._size

    def __len__(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def full(self) -> bool:
        return self._size == self._capacity