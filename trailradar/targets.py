"""
Latest state of the three target slots plus the frame counters.

`TargetTable.update()` replaces every slot with a fresh frozen `Target`,
so readers holding an older snapshot keep seeing consistent values.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from trailradar.constants import SLOTS
from trailradar.decode import TargetRecord


@dataclass(frozen=True)
class Target:
    present: bool = False
    x: int = 0
    y: int = 0
    v: int = 0
    last_seen: Optional[float] = None       # time.monotonic() of last frame


class TargetTable:
    def __init__(self) -> None:
        self._slots: Tuple[Target, ...] = tuple(Target() for _ in range(SLOTS))

    def update(self, records: Sequence[TargetRecord], now: float) -> None:
        """Overwrite all slots from one accepted frame."""
        if len(records) != SLOTS:
            raise ValueError(f"expected {SLOTS} records, got {len(records)}")
        self._slots = tuple(
            Target(r.present, r.x, r.y, r.v, now) for r in records
        )

    def snapshot(self) -> Tuple[Target, ...]:
        return self._slots

    def age(self, slot: int, now: float) -> Optional[float]:
        """Seconds since *slot* was last written, or None if never."""
        seen = self._slots[slot].last_seen
        return None if seen is None else max(now - seen, 0.0)


@dataclass(frozen=True)
class Counters:
    frames_seen: int = 0
    frames_accepted: int = 0
    decode_errors: int = 0

    def health(self) -> float:
        """Accepted / seen ratio; 1.0 before the first frame."""
        if not self.frames_seen:
            return 1.0
        return self.frames_accepted / self.frames_seen

    def as_dict(self) -> dict:
        return dict(frames_seen=self.frames_seen,
                    frames_accepted=self.frames_accepted,
                    decode_errors=self.decode_errors)
