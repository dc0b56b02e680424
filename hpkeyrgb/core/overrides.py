"""Resolve `name color name color ...` input into a per-key override table.

Names are either a group (expanded to every member key), one of the reserved
default names, or a single key identifier. Key identifiers are not checked
against the layout here: names the layout does not contain are kept but never
reach the wire.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .resources.layout import groups as layout_groups
from .utils.exceptions import ColorParseError, OddArgumentCountError


DEFAULT_NAMES = frozenset({"base", "all"})
DEFAULT_COLOR = 0xFFFFFF

_COLOR_RE = re.compile(r"#?[0-9a-fA-F]{1,6}")


def parse_color(token: str) -> int:
    """Parse `RRGGBB` / `#RRGGBB` (1-6 hex digits) into a 24-bit integer.

    Values wider than 24 bits are rejected instead of truncated.
    """

    if not isinstance(token, str) or _COLOR_RE.fullmatch(token) is None:
        raise ColorParseError(str(token))
    return int(token.lstrip("#"), 16)


@dataclass(frozen=True)
class OverrideTable:
    colors: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    default: Optional[int] = None

    def color_for(self, key: str) -> int:
        color = self.colors.get(key)
        if color is not None:
            return color
        if self.default is not None:
            return self.default
        return DEFAULT_COLOR

    def merged(self, other: "OverrideTable") -> "OverrideTable":
        """Return a new table where entries from *other* win."""

        colors = dict(self.colors)
        colors.update(other.colors)
        default = other.default if other.default is not None else self.default
        return OverrideTable(colors=MappingProxyType(colors), default=default)


def resolve_overrides(
    tokens: Iterable[str],
    *,
    groups: Optional[Mapping[str, Iterable[str]]] = None,
) -> OverrideTable:
    """Build an OverrideTable from alternating name/color tokens.

    Pairs apply left to right, so a later pair overwrites any key an earlier
    pair (or group) already set.

    Raises:
        OddArgumentCountError: the token count is odd.
        ColorParseError: a color token is not valid hex.
    """

    items = list(tokens)
    if len(items) % 2 != 0:
        raise OddArgumentCountError(len(items))

    group_table = layout_groups() if groups is None else groups

    colors: dict[str, int] = {}
    default: Optional[int] = None

    for name, token in zip(items[0::2], items[1::2]):
        color = parse_color(token)

        if name in DEFAULT_NAMES:
            default = color
            continue

        members = group_table.get(name)
        if members is not None:
            for key in members:
                colors[key] = color
        else:
            colors[name] = color

    return OverrideTable(colors=MappingProxyType(colors), default=default)
