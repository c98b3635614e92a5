"""Synchronize / decode tests on the full core."""

import dataclasses
import random

import pytest

from trailradar.constants import FLEN
from trailradar.core import RadarCore
from trailradar.targets import Target

from _frames import make_frame, target_at


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


class BytesSource:
    def __init__(self, data):
        self.data = bytearray(data)
        self.reads = []

    def available(self):
        return len(self.data)

    def read(self, n):
        out = bytes(self.data[:n])
        del self.data[:n]
        self.reads.append(len(out))
        return out


def _xs(core):
    return [t.x for t in core.targets()]


def test_single_valid_frame():
    core = RadarCore(clock=FakeClock(2.0))
    accepted = core.feed(make_frame(target_at(100, 1500, 16), (0x0005, 0x8000, 0)))

    assert len(accepted) == 1
    t0, t1, t2 = core.targets()
    assert t0 == Target(True, 100, 1500, 16, 2.0)
    assert t1 == Target(True, -5, 0, 0, 2.0)
    assert t2 == Target(False, 0, -32768, 0, 2.0)

    c = core.counters
    assert c.frames_seen == c.frames_accepted == 1
    assert c.decode_errors == 0


def test_corrupted_tail_leaves_table_alone():
    core = RadarCore()
    before = core.targets()
    frame = bytearray(make_frame(target_at(1, 1)))
    frame[-2:] = b"\x55\xCD"

    assert core.feed(bytes(frame)) == []
    assert core.targets() is before
    c = core.counters
    assert (c.frames_seen, c.frames_accepted, c.decode_errors) == (1, 0, 1)


def test_back_to_back_frames_in_order():
    n = 9
    stream = b"".join(make_frame(target_at(i, 0)) for i in range(n))
    core = RadarCore()

    accepted = core.feed(stream)

    assert [snap[0].x for snap in accepted] == list(range(n))
    assert core.counters.frames_accepted == n
    assert _xs(core)[0] == n - 1


def test_garbage_before_frame():
    core = RadarCore()
    core.feed(b"\x13\x37\x00\x55\xCC\xAA\xFF" + make_frame(target_at(42, 7)))
    assert core.counters.frames_accepted == 1
    assert core.targets()[0].x == 42


def test_split_frame_matches_whole_frame():
    frame = make_frame(target_at(3, 4, 5), target_at(6, 7))
    whole = RadarCore(clock=FakeClock(1.0))
    split = RadarCore(clock=FakeClock(1.0))

    whole.feed(frame)
    assert split.feed(frame[:15]) == []
    split.feed(frame[15:])

    assert split.targets() == whole.targets()
    assert split.counters == whole.counters
    assert split.counters.frames_accepted == 1


@pytest.mark.parametrize("cut", [1, 4, 5, 29])
def test_split_at_any_offset(cut):
    frame = make_frame(target_at(9, 9))
    core = RadarCore()
    core.feed(frame[:cut])
    core.feed(frame[cut:])
    assert core.counters.frames_accepted == 1


def test_bad_frame_then_good_frame():
    core = RadarCore()
    core.feed(make_frame(target_at(1, 1), tail=b"\x00\x00") + make_frame(target_at(2, 2)))
    c = core.counters
    assert (c.frames_seen, c.frames_accepted, c.decode_errors) == (2, 1, 1)
    assert core.targets()[0].x == 2


def test_buffer_stays_bounded_on_random_streams():
    rng = random.Random(1234)
    core = RadarCore(buffer_size=64)
    good = 0
    for _ in range(300):
        if rng.random() < 0.3:
            chunk = make_frame(target_at(rng.randrange(100), 0))
            good += 1
        else:
            chunk = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 90)))
        core.feed(chunk)
        assert len(core.buffer) <= core.buffer.capacity
        assert len(core.buffer) < FLEN
    assert core.counters.frames_accepted <= core.counters.frames_seen


def test_poll_reads_only_what_is_available():
    frames = b"".join(make_frame(target_at(i, 0)) for i in range(6))
    src = BytesSource(frames)
    core = RadarCore()

    accepted = core.poll(src)

    assert len(accepted) == 6
    assert sum(src.reads) == len(frames)
    assert max(src.reads) <= core.buffer.capacity
    assert core.poll(src) == []


def test_poll_samples_trail_on_cadence():
    clock = FakeClock(0.0)
    core = RadarCore(trail_len=3, sample_s=0.12, clock=clock)
    src = BytesSource(b"")

    for i in range(5):
        src.data += make_frame(target_at(i, 10 * i))
        core.poll(src)
        clock.t += 0.2

    assert core.trail(0) == [(2, 20), (3, 30), (4, 40)]
    assert core.trail(1) == [(0, -32768)] * 3


def test_burst_between_samples_keeps_latest_only():
    clock = FakeClock(0.0)
    core = RadarCore(sample_s=0.12, clock=clock)
    core.sample()
    core.feed(make_frame(target_at(1, 1)) + make_frame(target_at(2, 2)))
    clock.t = 0.5
    core.sample()
    assert core.trail(0) == [(0, 0), (2, 2)]


def test_on_sample_callback():
    seen = []
    core = RadarCore(clock=FakeClock(3.0), on_sample=lambda c, now: seen.append(now))
    assert core.sample()
    assert not core.sample()
    assert seen == [3.0]


def test_counters_snapshot_is_frozen():
    core = RadarCore()
    c = core.counters
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.frames_seen = 99
    core.feed(make_frame(target_at(1, 1)))
    assert c.frames_seen == 0
    assert core.counters.frames_seen == 1


def test_health_ratio():
    core = RadarCore()
    assert core.counters.health() == 1.0

    core.feed(make_frame(target_at(1, 1)) + make_frame(target_at(2, 2), tail=b"\x55\x00"))

    c = core.counters
    assert (c.frames_seen, c.frames_accepted, c.decode_errors) == (2, 1, 1)
    assert c.health() == 0.5


def test_feed_rejects_text():
    with pytest.raises(TypeError):
        RadarCore().feed("AAFF0300")


def test_buffer_size_must_hold_a_frame():
    with pytest.raises(ValueError):
        RadarCore(buffer_size=FLEN - 1)
