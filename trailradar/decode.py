"""
trailradar.decode
=================

Field decoders for the LD2450 target sub-record.

Each 8-byte sub-record holds four little-endian u16 words:

    x_raw  y_raw  v_raw  (reserved)

The sensor uses its own sign conventions, one per field, and they are
reproduced exactly:

    x : MSB=1 → positive (raw - 32768),   MSB=0 → negative (-raw)
    y : plain offset binary (raw - 32768)
    v : MSB=1 → negative (-(raw - 32768)), MSB=0 → positive (raw)
"""
from __future__ import annotations

from typing import NamedTuple

from trailradar.constants import OFFSET, SIGN_BIT, SUB_LEN


class TargetRecord(NamedTuple):
    x: int              # mm, lateral
    y: int              # mm, forward
    v: int              # cm/s, radial
    present: bool


def decode_x(raw: int) -> int:
    return raw - OFFSET if raw & SIGN_BIT else -raw


def decode_y(raw: int) -> int:
    return raw - OFFSET


def decode_v(raw: int) -> int:
    return -(raw - OFFSET) if raw & SIGN_BIT else raw


def _u16(b: bytes, off: int) -> int:
    return int.from_bytes(b[off : off + 2], "little")


def decode_record(chunk: bytes) -> TargetRecord:
    """Decode one 8-byte sub-record into a `TargetRecord`."""
    if len(chunk) != SUB_LEN:
        raise ValueError(f"sub-record must be {SUB_LEN} bytes, got {len(chunk)}")

    x_raw, y_raw, v_raw = (_u16(chunk, off) for off in (0, 2, 4))
    present = not (x_raw == 0 and y_raw == 0 and v_raw == 0)
    return TargetRecord(decode_x(x_raw), decode_y(y_raw), decode_v(v_raw),
                        present)
