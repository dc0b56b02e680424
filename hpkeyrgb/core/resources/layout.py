"""Key matrix layout and key groups for the 03f0:1f41 keyboard.

The controller addresses LEDs purely by position: slot N of the layout is the
N-th color byte the firmware expects across the three body "thirds"
(0-59, 60-119, 120-146). Names are the ones accepted on the command line.

Slots marked with `UNUSED` have no physical key behind them. They must stay at
their exact position, otherwise every key after them shifts.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple


UNUSED = "????"

LAYOUT_SIZE = 147

# fmt: off
_LAYOUT: Tuple[str, ...] = (
    # 0..59
    "esc", "\\", "tab", "capslock", "lshift", "lcontrol", "f12", "«", "f9", "9",
    "o", "l", ",", "<", UNUSED, "leftarrow", "f1", "1", "q", "a",
    UNUSED, "windows", "prtscrn", UNUSED, "f10", "0", "p", "ç", ".", UNUSED,
    "enter", "downarrow", "f2", "2", "w", "s", "z", "lalt", "sclock", "del",
    "f11", "'", "+", "º", "-", UNUSED, UNUSED, "rightarrow", "f3", "3",
    "e", "d", "x", UNUSED, "pause", "delete", UNUSED, "numpad7", "p1", UNUSED,
    # 60..119
    "numlock", "numpad6", UNUSED, UNUSED, "f4", "4", "r", "f", "c", UNUSED,
    "insert", "end", UNUSED, "numpad8", "p2", UNUSED, "numpad/", "numpad1", UNUSED, UNUSED,
    "f5", "5", "t", "g", "v", UNUSED, "home", "pgdown", "stop", "numpad9",
    "p3", UNUSED, "numpad*", "numpad2", UNUSED, UNUSED, "f6", "6", "y", "h",
    "b", UNUSED, "pgup", "rshift", "playlast", UNUSED, "p4", UNUSED, "numpad-", "numpad3",
    UNUSED, UNUSED, "f7", "7", "u", "j", "n", "altgr", "´", "rctrl",
    # 120..146
    "play", "numpad4", "p5", UNUSED, "numpad+", "numpad0", UNUSED, UNUSED, "f8", "8",
    "i", "k", "m", "fn", "~", "arrowup", "playnext", "numpad5", UNUSED, UNUSED,
    "numpadenter", "numpad.", UNUSED, UNUSED, UNUSED, UNUSED, UNUSED,
)
# fmt: on

_GROUPS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "pkeys": frozenset({"p1", "p2", "p3", "p4", "p5"}),
        "fkeys": frozenset(f"f{i}" for i in range(1, 13)),
        "media": frozenset({"stop", "playlast", "play", "playnext"}),
        "arrows": frozenset({"leftarrow", "downarrow", "rightarrow", "arrowup"}),
        "numpad": frozenset(
            {"numlock", "numpad/", "numpad*", "numpad-", "numpad+", "numpad.", "numpadenter"}
            | {f"numpad{i}" for i in range(10)}
        ),
        "system": frozenset({"prtscrn", "sclock", "pause", "insert", "del", "home", "end", "pgup", "pgdown"}),
    }
)


def layout() -> Tuple[str, ...]:
    """Return the fixed 147-slot key layout (sentinels included)."""

    return _LAYOUT


def groups() -> Mapping[str, frozenset[str]]:
    """Return the read-only group name -> key set table."""

    return _GROUPS


def key_names() -> list[str]:
    """Sorted real key identifiers, for help output."""

    return sorted({k for k in _LAYOUT if k != UNUSED})
