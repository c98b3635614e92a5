"""Byte queue tests."""

import pytest

from trailradar.intake import ByteQueue


def test_append_drops_overflow_tail():
    q = ByteQueue(8)
    assert q.append(b"abcde") == 5
    assert q.append(b"fghij") == 3
    assert bytes(q) == b"abcdefgh"
    assert q.free == 0
    assert q.append(b"x") == 0
    assert len(q) == 8


def test_find_peek_consume():
    q = ByteQueue(16)
    q.append(b"..AB..AB")
    assert q.find(b"AB") == 2
    assert q.find(b"AB", 3) == 6
    assert q.peek(3, 1) == b".AB"
    q.consume(4)
    assert bytes(q) == b"..AB"
    q.consume(100)
    assert len(q) == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ByteQueue(0)
