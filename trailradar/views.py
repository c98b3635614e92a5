"""
Read-only renderings of a `RadarCore` for dashboards & export.

Everything here works from snapshots (`core.targets()`, `core.trails()`,
`core.counters`) and never touches the core's live state, so a slow page
render can take as long as it likes.

`SampleLogger` appends one CSV line per trail sample to a daily file:

    log/<YYYY-MM-DD>_samples.csv
"""
from __future__ import annotations

import csv
import datetime as dt
import json
from pathlib import Path
from typing import IO, List, Optional

from trailradar.constants import LOG_DIR, SLOTS
from trailradar.core import RadarCore


def target_dicts(core: RadarCore, now: Optional[float] = None) -> List[dict]:
    now = core.clock() if now is None else now
    out = []
    for slot, t in enumerate(core.targets()):
        age = core.age(slot, now)
        out.append(dict(
            slot=slot, present=t.present,
            x_mm=t.x, y_mm=t.y, v_cms=t.v,
            age_s=None if age is None else round(age, 3),
        ))
    return out


def snapshot_dict(core: RadarCore, now: Optional[float] = None) -> dict:
    return dict(
        targets=target_dicts(core, now),
        trails=[[list(p) for p in trail] for trail in core.trails()],
        counters=core.counters.as_dict(),
    )


def to_json(core: RadarCore, now: Optional[float] = None, **kw) -> str:
    return json.dumps(snapshot_dict(core, now), **kw)


# ─────────────────────────────────────────────────────────── CSV
def csv_header() -> List[str]:
    cols = ["timestamp_iso"]
    for slot in range(SLOTS):
        cols += [f"t{slot}_present", f"t{slot}_x_mm",
                 f"t{slot}_y_mm", f"t{slot}_v_cms"]
    return cols + ["frames_seen", "frames_accepted", "decode_errors"]


def csv_row(core: RadarCore) -> list:
    row: list = [dt.datetime.now().isoformat(timespec="milliseconds")]
    for t in core.targets():
        row += [int(t.present), t.x, t.y, t.v]
    c = core.counters
    return row + [c.frames_seen, c.frames_accepted, c.decode_errors]


def csv_line(core: RadarCore) -> str:
    """Single comma-separated line (no newline) for a serial console."""
    return ",".join(str(v) for v in csv_row(core))


def write_trails_csv(core: RadarCore, fh: IO[str]) -> int:
    """Dump every trail, oldest first; returns the number of points."""
    wr = csv.writer(fh)
    wr.writerow(["slot", "index", "x_mm", "y_mm"])
    n = 0
    for slot, trail in enumerate(core.trails()):
        for i, (x, y) in enumerate(trail):
            wr.writerow([slot, i, x, y])
            n += 1
    return n


class SampleLogger:
    """`RadarCore` on_sample callback writing `csv_row()` to a daily file."""

    def __init__(self, log_dir: Path = LOG_DIR) -> None:
        log_dir.mkdir(parents=True, exist_ok=True)
        self.path: Path = log_dir / f"{dt.date.today().isoformat()}_samples.csv"
        fresh = not self.path.exists()
        self.fh = self.path.open("a", newline="")
        if fresh:
            csv.writer(self.fh).writerow(csv_header())

    def __call__(self, core: RadarCore, now: float) -> None:
        csv.writer(self.fh).writerow(csv_row(core))
        self.fh.flush()

    def close(self) -> None:
        self.fh.close()
