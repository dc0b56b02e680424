from __future__ import annotations

from typing import Optional, Sequence

from .overrides import OverrideTable
from .protocol import BODY_SIZE, INIT_REPORT, LINE_TEMPLATES, LineTemplate
from .resources.layout import layout as default_layout


def channel(color: int, offset: int) -> int:
    """Extract the 8-bit channel at *offset* (16=R, 8=G, 0=B)."""

    return (int(color) >> int(offset)) & 0xFF


def encode_line(line_index: int, template: LineTemplate, keys: Sequence[str], overrides: OverrideTable) -> bytes:
    """Encode one color line report: header followed by one byte per mask position."""

    base = (line_index % 3) * BODY_SIZE
    out = bytearray(template.header)
    for idx, flag in enumerate(template.mask):
        if flag == 0:
            out.append(0)
            continue
        out.append(channel(overrides.color_for(keys[base + idx]), template.offset))
    return bytes(out)


def encode(keys: Optional[Sequence[str]] = None, overrides: Optional[OverrideTable] = None) -> list[bytes]:
    """Encode the full programming pass: initiation report + nine line reports.

    Sentinel slots with a non-zero mask byte get the default color, like any
    other key without an explicit override.
    """

    keys = default_layout() if keys is None else keys
    overrides = OverrideTable() if overrides is None else overrides

    reports = [bytes(INIT_REPORT)]
    for line_index, template in enumerate(LINE_TEMPLATES):
        reports.append(encode_line(line_index, template, keys, overrides))
    return reports


def decode_line(report: bytes, template: LineTemplate) -> list[Optional[int]]:
    """Inverse view of encode_line: channel byte per body position, None where masked out."""

    body = report[len(template.header) :]
    return [None if flag == 0 else body[idx] for idx, flag in enumerate(template.mask)]
