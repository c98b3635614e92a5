"""
trailradar.core
===============

`RadarCore` owns every piece of mutable radar state – intake queue, target
table, counters and trails – and runs the cooperative cycle:

    core.poll(source)      # drain what is available, decode, maybe sample

`source` is anything with

    available() -> int     # bytes ready right now
    read(n)     -> bytes   # up to n bytes, never blocks on an empty port

Nothing here blocks and nothing here raises on bad input bytes; corrupted
frames only show up in `core.counters.decode_errors`.

Usage
-----
    core = RadarCore()
    core.feed(chunk)                   # or core.poll(source)
    core.targets()                     # (Target, Target, Target)
    core.trails()                      # [[(x, y), ...] × 3]
"""
from __future__ import annotations

import dataclasses
import logging
import time
from typing import Callable, List, Optional, Tuple

from trailradar.constants import BUF_SIZE, FLEN, SAMPLE_S, TRAIL_LEN
from trailradar.frames import decode_frame, iter_frames, tail_ok
from trailradar.intake import ByteQueue
from trailradar.targets import Counters, Target, TargetTable
from trailradar.trail import Point, TrailRecorder

log = logging.getLogger(__name__)

Snapshot = Tuple[Target, ...]


class RadarCore:
    def __init__(self,
                 buffer_size: int = BUF_SIZE,
                 trail_len: int = TRAIL_LEN,
                 sample_s: float = SAMPLE_S,
                 clock: Callable[[], float] = time.monotonic,
                 on_sample: Optional[Callable[["RadarCore", float], None]] = None,
                 ) -> None:
        if buffer_size < FLEN:
            raise ValueError(f"buffer_size must hold a full frame ({FLEN} bytes)")
        self.clock     = clock
        self.buffer    = ByteQueue(buffer_size)
        self.table     = TargetTable()
        self.recorder  = TrailRecorder(trail_len, sample_s)
        self._counters = Counters()
        self._on_sample = on_sample           # callback(core, now)

    # ───────────────────────── intake & decoding
    def feed(self, data: bytes, now: Optional[float] = None) -> List[Snapshot]:
        """
        Push raw bytes through the synchronizer.

        Large inputs are taken in capacity-sized bites with a full
        synchronize pass after each one, so back-to-back frames arriving
        in a single chunk are all decoded.  Returns one table snapshot per
        accepted frame, in stream order.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes, got {type(data).__name__}")

        view = memoryview(data).cast("B")
        accepted: List[Snapshot] = []
        while len(view):
            n = self.buffer.append(view)
            view = view[n:]
            accepted += self.synchronize(now)
            if n == 0 and len(view):            # queue stuck full
                log.debug("intake overflow, dropping %d bytes", len(view))
                break
        return accepted

    def synchronize(self, now: Optional[float] = None) -> List[Snapshot]:
        """Decode every complete frame currently buffered."""
        accepted = []
        for frame in iter_frames(self.buffer):
            snap = self.handle_frame(frame, self.clock() if now is None else now)
            if snap is not None:
                accepted.append(snap)
        return accepted

    def handle_frame(self, frame: bytes, now: float) -> Optional[Snapshot]:
        """Validate one extracted frame and, if good, overwrite the table."""
        c = self._counters
        if not tail_ok(frame):
            self._counters = dataclasses.replace(
                c, frames_seen=c.frames_seen + 1,
                decode_errors=c.decode_errors + 1)
            log.debug("bad frame tail %s", frame[-2:].hex())
            return None

        self.table.update(decode_frame(frame), now)
        self._counters = dataclasses.replace(
            c, frames_seen=c.frames_seen + 1,
            frames_accepted=c.frames_accepted + 1)
        return self.table.snapshot()

    # ───────────────────────── cooperative cycle
    def sample(self, now: Optional[float] = None) -> bool:
        """Record trail points if the sampling cadence has elapsed."""
        now = self.clock() if now is None else now
        taken = self.recorder.maybe_sample(self.table.snapshot(), now)
        if taken and self._on_sample is not None:
            self._on_sample(self, now)
        return taken

    def poll(self, source) -> List[Snapshot]:
        """
        One pass of the cooperative loop.

        Reads at most what the source reported as available on entry, so
        a chatty port cannot keep this call from returning.
        """
        budget = source.available()
        accepted: List[Snapshot] = []
        while budget > 0:
            chunk = source.read(min(budget, self.buffer.free))
            if not chunk:
                break
            budget -= len(chunk)
            accepted += self.feed(chunk)
        self.sample()
        return accepted

    # ───────────────────────── read-only views
    def targets(self) -> Snapshot:
        return self.table.snapshot()

    def age(self, slot: int, now: Optional[float] = None) -> Optional[float]:
        return self.table.age(slot, self.clock() if now is None else now)

    def trail(self, slot: int) -> List[Point]:
        return self.recorder.trail(slot)

    def trails(self) -> List[List[Point]]:
        return self.recorder.trails()

    @property
    def counters(self) -> Counters:
        """Frozen; the decoder publishes a new one per frame."""
        return self._counters
