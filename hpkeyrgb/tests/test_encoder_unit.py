#!/usr/bin/env python3
"""Unit tests for core/encoder.py - report construction from layout + overrides."""

from __future__ import annotations

import pytest

from hpkeyrgb.core.encoder import channel, decode_line, encode, encode_line
from hpkeyrgb.core.overrides import OverrideTable, resolve_overrides
from hpkeyrgb.core.protocol import BLUE, BODY_SIZE, GREEN, INIT_REPORT, LINE_TEMPLATES, RED, REPORT_COUNT, REPORT_SIZE
from hpkeyrgb.core.resources.layout import UNUSED, layout


def _position_of(key: str) -> tuple[int, int]:
    """(third, body index) of *key* in the layout."""

    pos = layout().index(key)
    return pos // BODY_SIZE, pos % BODY_SIZE


def _lines_for_third(third: int):
    return [(i, t) for i, t in enumerate(LINE_TEMPLATES) if i % 3 == third]


def test_channel_extraction() -> None:
    assert channel(0x123456, RED) == 0x12
    assert channel(0x123456, GREEN) == 0x34
    assert channel(0x123456, BLUE) == 0x56
    assert channel(0xAB123456, RED) == 0x12


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        ["pkeys", "ff0000"],
        ["base", "000000", "esc", "abcdef"],
        ["unknown", "123456"],
    ],
)
def test_encode_always_produces_ten_fixed_size_reports(tokens) -> None:
    reports = encode(layout(), resolve_overrides(tokens))
    assert len(reports) == REPORT_COUNT == 10
    assert reports[0] == INIT_REPORT
    assert all(len(r) == REPORT_SIZE for r in reports)


def test_report_headers_follow_template_order() -> None:
    reports = encode(layout(), OverrideTable())
    headers = [r[:4].hex() for r in reports[1:]]
    assert headers == [
        "05003c00",
        "05013c00",
        "05021800",
        "06003c00",
        "06013c00",
        "06021800",
        "07003c00",
        "07013c00",
        "07021800",
    ]


def test_channel_offsets_grouped_high_to_low() -> None:
    assert [t.offset for t in LINE_TEMPLATES] == [RED] * 3 + [GREEN] * 3 + [BLUE] * 3


def test_masked_positions_are_always_zero() -> None:
    reports = encode(layout(), resolve_overrides(["base", "ffffff"]))
    for line_index, template in enumerate(LINE_TEMPLATES):
        body = reports[line_index + 1][len(template.header) :]
        for idx, flag in enumerate(template.mask):
            if flag == 0:
                assert body[idx] == 0


def test_pkeys_red_scenario() -> None:
    reports = encode(layout(), resolve_overrides(["pkeys", "ff0000"]))
    pkey_positions = {_position_of(k) for k in ("p1", "p2", "p3", "p4", "p5")}
    expected_channel = {RED: 0xFF, GREEN: 0x00, BLUE: 0x00}

    for line_index, template in enumerate(LINE_TEMPLATES):
        third = line_index % 3
        decoded = decode_line(reports[line_index + 1], template)
        for idx, value in enumerate(decoded):
            if value is None:
                continue
            if (third, idx) in pkey_positions:
                assert value == expected_channel[template.offset], (line_index, idx)
            else:
                assert value == 0xFF, (line_index, idx)


def test_round_trip_reconstructs_overridden_colors() -> None:
    wanted = {"esc": 0x102030, "numpad.": 0xA0B0C0, "p3": 0x0F0E0D, "f7": 0x00FF7F}
    tokens = []
    for key, color in wanted.items():
        tokens += [key, f"{color:06x}"]
    reports = encode(layout(), resolve_overrides(tokens))

    for key, color in wanted.items():
        third, idx = _position_of(key)
        rebuilt = 0
        for line_index, template in _lines_for_third(third):
            value = decode_line(reports[line_index + 1], template)[idx]
            assert value is not None, key
            rebuilt |= value << template.offset
        assert rebuilt == color, key


def test_default_color_applies_to_unmentioned_keys() -> None:
    reports = encode(layout(), resolve_overrides(["all", "010203", "esc", "ffffff"]))
    third, idx = _position_of("tab")
    values = {t.offset: decode_line(reports[i + 1], t)[idx] for i, t in _lines_for_third(third)}
    assert values == {RED: 0x01, GREEN: 0x02, BLUE: 0x03}


def test_sentinel_slot_with_open_mask_gets_default() -> None:
    keys = layout()
    # Slot 69 (second third, body index 9) has no key name but its mask byte is set.
    assert keys[69] == UNUSED
    assert LINE_TEMPLATES[1].mask[9] != 0
    reports = encode(keys, resolve_overrides(["base", "336699"]))
    assert reports[2][4 + 9] == 0x33
    assert reports[5][4 + 9] == 0x66
    assert reports[8][4 + 9] == 0x99


def test_unknown_override_keys_are_inert() -> None:
    plain = encode(layout(), OverrideTable())
    with_unknown = encode(layout(), resolve_overrides(["nosuchkey", "000000"]))
    assert plain == with_unknown


def test_encode_defaults_to_builtin_layout_and_white() -> None:
    assert encode() == encode(layout(), OverrideTable())


def test_encode_line_uses_line_third() -> None:
    keys = tuple(f"k{i}" for i in range(147))
    table = resolve_overrides(["k60", "ff0000"])
    line = encode_line(1, LINE_TEMPLATES[1], keys, table)
    assert line[4] == 0xFF
    line = encode_line(4, LINE_TEMPLATES[4], keys, table)
    assert line[4] == 0x00


def test_templates_describe_full_bodies() -> None:
    for template in LINE_TEMPLATES:
        assert len(template.header) == 4
        assert len(template.mask) == BODY_SIZE
        assert len(template.header) + len(template.mask) == REPORT_SIZE
    assert len(INIT_REPORT) == REPORT_SIZE


# Full wire bytes for `pkeys ff0000` with no default. Red lines equal the masks
# (every key has R=ff); green and blue lines zero the p1..p5 positions.
_PKEYS_RED_REPORTS = (
    "04000200fcea0000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000",
    "05003c00ffffffffffffffffffffffffffff00ffffffffff00ffff00ffffffff"
    "ff00ffffffffffffffffffffffffffffff0000ffffffffffff00ffff00ffff00",
    "05013c00ffff0000ffffffffffffffff00ffff00ffff0000ffffffffff00ffff"
    "ffffff00ffff0000ffffffffff00ffffff00ff00ffff0000ffffffffffffffff",
    "05021800ffffff00ffff0000ffffffffffffffffffff0000ffff000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000",
    "06003c00ffffffffffffffffffffffffffff00ffffffffff00ffff00ffffffff"
    "ff00ffffffffffffffffffffffffffffff0000ffffffffffff00ffff00ff0000",
    "06013c00ffff0000ffffffffffffffff00ff0000ffff0000ffffffffff00ffff"
    "ffff0000ffff0000ffffffffff00ffffff000000ffff0000ffffffffffffffff",
    "06021800ffff0000ffff0000ffffffffffffffffffff0000ffff000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000",
    "07003c00ffffffffffffffffffffffffffff00ffffffffff00ffff00ffffffff"
    "ff00ffffffffffffffffffffffffffffff0000ffffffffffff00ffff00ff0000",
    "07013c00ffff0000ffffffffffffffff00ff0000ffff0000ffffffffff00ffff"
    "ffff0000ffff0000ffffffffff00ffffff000000ffff0000ffffffffffffffff",
    "07021800ffff0000ffff0000ffffffffffffffffffff0000ffff000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000",
)


def test_pkeys_red_wire_bytes_are_pinned() -> None:
    reports = encode(layout(), resolve_overrides(["pkeys", "ff0000"]))
    assert [r.hex() for r in reports] == list(_PKEYS_RED_REPORTS)
