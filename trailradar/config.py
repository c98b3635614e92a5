"""
trailradar.config
=================

Tiny helper that loads / saves *radar_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
from pathlib import Path

from trailradar.constants import BUF_SIZE, CFG_PATH, FLEN, SAMPLE_S, TRAIL_LEN

_DEFAULT = {
    # input selection
    "input_mode": "serial",           # "serial"  or  "mqtt"
    "serial_port": "/dev/ttyUSB0",
    "serial_baud": 256000,

    # MQTT (only used when input_mode == "mqtt")
    "broker": "127.0.0.1",
    "port": 1883,
    "topic": "trailradar/raw",

    # core
    "buffer_size": BUF_SIZE,          # bytes
    "trail_len": TRAIL_LEN,           # points per target
    "sample_ms": round(SAMPLE_S * 1000),

    # output
    "csv_log": False,
    "status_every": 5.0,              # seconds
    "log_level": "INFO",
}

_INTS   = ("serial_baud", "port", "buffer_size", "trail_len", "sample_ms")
_FLOATS = ("status_every",)


def _check(cfg: dict) -> dict:
    for key in _INTS:
        try:
            cfg[key] = int(cfg[key])
        except (TypeError, ValueError):
            raise ValueError(f"{key}: expected an integer, got {cfg[key]!r}") from None
        if cfg[key] <= 0:
            raise ValueError(f"{key}: must be positive, got {cfg[key]}")
    for key in _FLOATS:
        try:
            cfg[key] = float(cfg[key])
        except (TypeError, ValueError):
            raise ValueError(f"{key}: expected a number, got {cfg[key]!r}") from None
    if cfg["buffer_size"] < FLEN:
        raise ValueError(f"buffer_size: must be at least {FLEN}")
    if cfg["input_mode"] not in ("serial", "mqtt"):
        raise ValueError(f"input_mode: unknown mode {cfg['input_mode']!r}")
    return cfg


def load(path: Path = CFG_PATH) -> dict:
    try:
        with open(path) as fh:
            return _check({**_DEFAULT, **json.load(fh)})
    except FileNotFoundError:
        save(_DEFAULT, path)
        return dict(_DEFAULT)


def save(cfg: dict, path: Path = CFG_PATH) -> None:
    path.write_text(json.dumps(cfg, indent=2))
