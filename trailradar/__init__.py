"""
trailradar package
==================

LD2450 frame synchronizer, target table & trail recorder.
"""

__all__ = [
    "constants",
    "config",
    "intake",
    "decode",
    "frames",
    "targets",
    "trail",
    "core",
    "serial_reader",
    "mqtt_client",
    "views",
]

__version__ = "1.0"
