"""hpkeyrgb configuration.

Settings are only ever read; nothing here writes back to disk.
"""

from __future__ import annotations

from .config import Config
from .file_storage import load_config_settings
from .paths import config_dir, config_file_path


__all__ = [
    "Config",
    "config_dir",
    "config_file_path",
    "load_config_settings",
]
