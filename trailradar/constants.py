"""
Wire-format constants, buffer sizes & paths so every module can import
them without circular dependencies.
"""
from pathlib import Path

# -------- LD2450 frame layout --------
HDR  = bytes.fromhex("AAFF0300")        # frame header
FTR  = bytes.fromhex("55CC")            # frame footer
FLEN = 30                               # full frame length (bytes)

SLOTS    = 3                            # fixed target slots per frame
SUB_OFF  = (4, 12, 20)                  # sub-record offsets inside a frame
SUB_LEN  = 8                            # x, y, v, resolution (u16 LE each)

SIGN_BIT = 0x8000
OFFSET   = 32768

# -------- buffers & cadence --------
BUF_SIZE  = 128                         # intake capacity (bytes)
TRAIL_LEN = 50                          # positions kept per target
SAMPLE_S  = 0.120                       # trail sampling cadence

# -------- dirs --------
ROOT      = Path(__file__).resolve().parent.parent
LOG_DIR   = ROOT / "log"
CFG_PATH  = ROOT / "radar_config.json"
