"""
trailradar.intake
=================

Capped byte queue sitting between the byte source and the synchronizer.

The queue never grows past its capacity: whatever part of an append does
not fit is dropped on the floor.  The synchronizer inspects the queue with
`find()` / `peek()` and removes a prefix with `consume()`.
"""
from __future__ import annotations

from trailradar.constants import BUF_SIZE


class ByteQueue:
    def __init__(self, capacity: int = BUF_SIZE) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    @property
    def free(self) -> int:
        return self.capacity - len(self._buf)

    # ───────────────────────── public API
    def append(self, data: bytes) -> int:
        """Store as much of *data* as fits; return the number of bytes kept."""
        n = min(len(data), self.free)
        if n:
            self._buf += data[:n]
        return n

    def find(self, pattern: bytes, start: int = 0) -> int:
        return self._buf.find(pattern, start)

    def peek(self, n: int, start: int = 0) -> bytes:
        return bytes(self._buf[start : start + n])

    def consume(self, k: int) -> None:
        """Drop the first *k* bytes (everything if *k* exceeds the fill)."""
        del self._buf[:k]
