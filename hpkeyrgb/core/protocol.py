"""Wire protocol constants for the 03f0:1f41 per-key RGB controller.

One programming pass is ten interrupt OUT reports:

- report 0: a fixed initiation report (selects the per-key color tables)
- reports 1..9: one per LineTemplate, `header (4 bytes) + body (60 bytes)`

Each line carries one color channel for one third of the key layout. The body
mask marks which byte positions carry a key (0xff) and which are always zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


VENDOR_ID = 0x03F0
PRODUCT_ID = 0x1F41

# Fixed per-transfer timeout; the controller either answers well within this or
# NAKs the report entirely.
TRANSFER_TIMEOUT_MS = 1000

BODY_SIZE = 60
REPORT_SIZE = 64

# Channel byte offsets within a 0xRRGGBB value.
RED = 16
GREEN = 8
BLUE = 0

INIT_REPORT = bytes.fromhex(
    "04000200fcea0000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000"
)

_MASK_LOW = bytes.fromhex(
    "ffffffffffffffffffffffffffff00ffffffffff00ffff00ffffffffff00ffff"
    "ffffffffffffffffffffffffff0000ffffffffffff00ffff00ffff00"
)
_MASK_MID = bytes.fromhex(
    "ffff0000ffffffffffffffff00ffff00ffff0000ffffffffff00ffffffffff00"
    "ffff0000ffffffffff00ffffff00ff00ffff0000ffffffffffffffff"
)
_MASK_HIGH = bytes.fromhex(
    "ffffff00ffff0000ffffffffffffffffffff0000ffff00000000000000000000"
    "00000000000000000000000000000000000000000000000000000000"
)


@dataclass(frozen=True)
class LineTemplate:
    """Static descriptor for one color line report."""

    header: bytes
    mask: bytes
    offset: int  # RED / GREEN / BLUE


LINE_TEMPLATES: Tuple[LineTemplate, ...] = (
    LineTemplate(header=bytes.fromhex("05003c00"), mask=_MASK_LOW, offset=RED),
    LineTemplate(header=bytes.fromhex("05013c00"), mask=_MASK_MID, offset=RED),
    LineTemplate(header=bytes.fromhex("05021800"), mask=_MASK_HIGH, offset=RED),
    LineTemplate(header=bytes.fromhex("06003c00"), mask=_MASK_LOW, offset=GREEN),
    LineTemplate(header=bytes.fromhex("06013c00"), mask=_MASK_MID, offset=GREEN),
    LineTemplate(header=bytes.fromhex("06021800"), mask=_MASK_HIGH, offset=GREEN),
    LineTemplate(header=bytes.fromhex("07003c00"), mask=_MASK_LOW, offset=BLUE),
    LineTemplate(header=bytes.fromhex("07013c00"), mask=_MASK_MID, offset=BLUE),
    LineTemplate(header=bytes.fromhex("07021800"), mask=_MASK_HIGH, offset=BLUE),
)

REPORT_COUNT = 1 + len(LINE_TEMPLATES)
