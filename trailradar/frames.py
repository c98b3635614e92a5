"""
trailradar.frames
=================

Header scan / resync and frame validation for the 30-byte LD2450 report.

    AA FF 03 00 | target 1 (8) | target 2 (8) | target 3 (8) | 55 CC

`next_frame()` performs one synchronizer step on a `ByteQueue`:

• < 30 bytes buffered               → wait, nothing removed
• header at h, h + 30 available     → frame returned, h + 30 bytes removed
• header at h, frame still partial  → the h garbage bytes removed, wait
• no header                         → trimmed to the last 29 bytes

`iter_frames()` repeats that until the queue cannot yield another frame.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from trailradar.constants import FLEN, FTR, HDR, SUB_LEN, SUB_OFF
from trailradar.decode import TargetRecord, decode_record
from trailradar.intake import ByteQueue

log = logging.getLogger(__name__)


def next_frame(buf: ByteQueue) -> Optional[bytes]:
    if len(buf) < FLEN:
        return None

    idx = buf.find(HDR)
    if idx == -1:                                # no header anywhere
        drop = len(buf) - (FLEN - 1)
        log.debug("no header, dropping %d bytes", drop)
        buf.consume(drop)                        # keep a straddling header
        return None

    if len(buf) < idx + FLEN:                    # incomplete frame
        if idx:
            log.debug("resync, dropping %d bytes before header", idx)
            buf.consume(idx)
        return None

    frame = buf.peek(FLEN, idx)
    if idx:
        log.debug("resync, skipped %d bytes before header", idx)
    buf.consume(idx + FLEN)
    return frame


def iter_frames(buf: ByteQueue) -> Iterator[bytes]:
    """Yield every complete frame in *buf*, in stream order."""
    while True:
        frame = next_frame(buf)
        if frame is None:
            return
        yield frame


def tail_ok(frame: bytes) -> bool:
    return len(frame) == FLEN and frame.startswith(HDR) and frame.endswith(FTR)


def decode_frame(frame: bytes) -> List[TargetRecord]:
    """Decode the three sub-records of a validated frame (slot order)."""
    return [decode_record(frame[off : off + SUB_LEN]) for off in SUB_OFF]
