"""Where hpkeyrgb looks for config.json.

Lookup order, first hit wins:

- HPKEYRGB_CONFIG_PATH: the file itself
- HPKEYRGB_CONFIG_DIR: directory holding config.json
- $XDG_CONFIG_HOME/hpkeyrgb
- ~/.config/hpkeyrgb
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

CONFIG_FILENAME = "config.json"


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


def config_dir() -> Path:
    explicit = _env_path("HPKEYRGB_CONFIG_DIR")
    if explicit is not None:
        return explicit

    xdg = _env_path("XDG_CONFIG_HOME")
    base = xdg if xdg is not None else Path.home() / ".config"
    return base / "hpkeyrgb"


def config_file_path() -> Path:
    explicit = _env_path("HPKEYRGB_CONFIG_PATH")
    return explicit if explicit is not None else config_dir() / CONFIG_FILENAME
