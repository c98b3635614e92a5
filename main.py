"""
Entry-point.  Keeps top-level script tiny.
"""
import logging
import time

from trailradar import config
from trailradar.core import RadarCore
from trailradar.mqtt_client import RadarMQTT
from trailradar.serial_reader import RadarSerial
from trailradar.views import SampleLogger

log = logging.getLogger("trailradar")


def _status(core: RadarCore) -> str:
    seen = " ".join(
        f"T{slot}({t.x},{t.y},{t.v})" if t.present else f"T{slot}(-)"
        for slot, t in enumerate(core.targets())
    )
    c = core.counters
    return f"{seen}  health={c.health():.2f}  errors={c.decode_errors}"


def main():
    cfg = config.load()
    logging.basicConfig(level=cfg["log_level"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sample_log = SampleLogger() if cfg["csv_log"] else None
    core = RadarCore(buffer_size=cfg["buffer_size"],
                     trail_len=cfg["trail_len"],
                     sample_s=cfg["sample_ms"] / 1000,
                     on_sample=sample_log)

    if cfg["input_mode"] == "mqtt":
        reader = RadarMQTT(cfg["broker"], cfg["port"], cfg["topic"], core)
    else:
        reader = RadarSerial(cfg["serial_port"], cfg["serial_baud"], core)

    reader.start()
    try:
        while reader.alive:
            time.sleep(cfg["status_every"])
            log.info(_status(core))
        log.error("reader stopped, exiting")
    except KeyboardInterrupt:
        pass
    finally:
        reader.stop()
        if sample_log is not None:
            sample_log.close()

if __name__ == "__main__":
    main()
