import logging
import threading
import uuid
from queue import Empty, Queue

import paho.mqtt.client as mqtt

from trailradar.core import RadarCore

log = logging.getLogger(__name__)


class RadarMQTT:
    """
    Byte source fed by an MQTT topic carrying hex-encoded LD2450 output.

    Payloads are decoded on paho's network thread and only queued there;
    the bytes reach the core through `available()` / `read()` from the
    polling side, so the core keeps a single writer.

    Payloads need not be whole frames: the synchronizer reassembles frames
    split across messages and skips whatever garbage arrives between them.
    """

    IDLE_S = 0.005

    def __init__(self, host, port, topic, core: RadarCore):
        self.host, self.port, self.topic = host, port, topic
        self.core = core

        self.q: "Queue[bytes]" = Queue()
        self._pending = bytearray()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self.run, daemon=True)

        random_id = f"trailradar-{uuid.uuid4().hex[:8]}"
        self.cli = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2,
                               client_id=random_id)
        self.cli.on_connect = self._on_connect
        self.cli.on_message = self._on_msg

    def connect(self):
        self.cli.connect(self.host, self.port, 60)
        self.cli.loop_start()
        log.info("connected to %s:%s, topic %s", self.host, self.port, self.topic)

    def disconnect(self):
        self.cli.loop_stop()
        self.cli.disconnect()

    def _on_connect(self, client, *_):
        client.subscribe(self.topic)

    def _on_msg(self, _cli, _userdata, msg):
        try:
            buf = bytes.fromhex(msg.payload.decode().strip())
        except (UnicodeDecodeError, ValueError):
            log.debug("ignoring malformed payload on %s", msg.topic)
            return
        if buf:
            self.q.put_nowait(buf)

    # ───────────────────────── byte source protocol
    def available(self) -> int:
        while True:
            try:
                self._pending += self.q.get_nowait()
            except Empty:
                return len(self._pending)

    def read(self, n: int) -> bytes:
        out = bytes(self._pending[:n])
        del self._pending[:n]
        return out

    # ───────────────────────── polling
    def poll(self):
        return self.core.poll(self)

    def run(self):
        while not self._stop.is_set():
            self.poll()
            self._stop.wait(self.IDLE_S)

    @property
    def alive(self):
        return self._thread.is_alive()

    def start(self):
        self.connect()
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1)
        self.disconnect()
