"""
trailradar.serial_reader
========================

Non-blocking LD2450 byte source for a local serial port connection.

The reader owns the port and drives a `RadarCore`: every cycle it hands
over whatever bytes are already waiting (never blocking on an empty port),
lets the core decode and sample, then sleeps a few milliseconds so other
work gets a turn.

Usage
-----
    core   = RadarCore()
    reader = RadarSerial("/dev/ttyUSB0", 256000, core)
    reader.start()     # spawns a background thread
    reader.stop()      # clean shutdown

    reader.run()       # …or poll in the foreground until stop()
"""
from __future__ import annotations

import logging
import threading

import serial

from trailradar.core import RadarCore

log = logging.getLogger(__name__)


class RadarSerial:
    IDLE_S = 0.005                     # pause between polls

    def __init__(self, port: str, baud: int, core: RadarCore, ser=None):
        self.port, self.baud = port, baud
        self.core    = core
        self._ser    = ser                         # injected port (tests)
        self._stop   = threading.Event()
        self._thread = threading.Thread(target=self.run, daemon=True)

    # ───────────────────────── byte source protocol
    def available(self) -> int:
        return self._ser.in_waiting

    def read(self, n: int) -> bytes:
        return self._ser.read(n) if n > 0 else b""

    # ───────────────────────── public API
    def open(self) -> None:
        if self._ser is None:
            self._ser = serial.Serial(self.port, self.baud, timeout=0)
            log.info("opened %s @ %d baud", self.port, self.baud)

    def close(self) -> None:
        if self._ser is not None:
            self._ser.close()
            self._ser = None

    def poll(self):
        """One cooperative cycle; returns the snapshots decoded."""
        if self._ser is None:
            self.open()
        return self.core.poll(self)

    def run(self) -> None:
        try:
            self.open()
            while not self._stop.is_set():
                self.poll()
                self._stop.wait(self.IDLE_S)
        except serial.SerialException as exc:
            log.error("serial port %s failed: %s", self.port, exc)
        finally:
            self.close()
            log.info("serial reader stopped")

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1)
