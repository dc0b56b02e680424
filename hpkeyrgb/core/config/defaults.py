"""Default configuration values."""

from __future__ import annotations

DEFAULTS: dict = {
    # Applied before command-line pairs, e.g. {"base": "000000", "pkeys": "ff0000"}.
    # Same names as the command line: keys, groups, "base"/"all".
    "overrides": {},
}
