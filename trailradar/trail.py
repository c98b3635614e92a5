"""
trailradar.trail
================

Fixed-size position history per target slot.

`Ring` is a plain circular buffer (capacity, head, count).  `TrailRecorder`
keeps one ring per slot and samples the target table on its own cadence,
not once per frame, so bursts of frames collapse into a single point and
an empty slot shows up as a run of its decoded placeholder position.
"""
from __future__ import annotations

from typing import Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from trailradar.constants import SAMPLE_S, SLOTS, TRAIL_LEN
from trailradar.targets import Target

T = TypeVar("T")
Point = Tuple[int, int]


class Ring(Generic[T]):
    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: List[Optional[T]] = [None] * capacity
        self.head  = 0                      # next write index
        self.count = 0                      # valid entries, saturates

    def __len__(self) -> int:
        return self.count

    def push(self, item: T) -> None:
        """Append *item*, overwriting the oldest entry once full."""
        self._items[self.head] = item
        self.head = (self.head + 1) % self.capacity
        if self.count < self.capacity:
            self.count += 1

    def __iter__(self) -> Iterator[T]:
        """Oldest → newest."""
        start = (self.head - self.count) % self.capacity
        for i in range(self.count):
            yield self._items[(start + i) % self.capacity]

    def clear(self) -> None:
        self._items = [None] * self.capacity
        self.head = self.count = 0


class TrailRecorder:
    def __init__(self, capacity: int = TRAIL_LEN,
                 interval: float = SAMPLE_S) -> None:
        self.interval = interval
        self.rings: List[Ring[Point]] = [Ring(capacity) for _ in range(SLOTS)]
        self.last_sample: Optional[float] = None

    def due(self, now: float) -> bool:
        return self.last_sample is None or now - self.last_sample >= self.interval

    def maybe_sample(self, targets: Sequence[Target], now: float) -> bool:
        """
        Push every slot's current (x, y) if the cadence has elapsed.

        Absent targets are recorded too.  Returns True when a sample
        was taken.
        """
        if not self.due(now):
            return False
        for ring, t in zip(self.rings, targets):
            ring.push((t.x, t.y))
        self.last_sample = now
        return True

    # ───────────────────────── snapshots
    def trail(self, slot: int) -> List[Point]:
        return list(self.rings[slot])

    def trails(self) -> List[List[Point]]:
        return [list(r) for r in self.rings]
