"""hpkeyrgb Config implementation (read-only)."""

from __future__ import annotations

import logging

from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_config_settings
from .paths import config_file_path

logger = logging.getLogger(__name__)


class Config:
    """Read-only view of config.json."""

    DEFAULTS = _DEFAULTS

    def __init__(self):
        # Recompute at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_FILE = config_file_path()
        self._settings = load_config_settings(
            config_file=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            logger=logger,
        )

    @property
    def overrides(self) -> dict[str, str]:
        raw = self._settings.get("overrides")
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Ignoring config 'overrides': expected an object, got %s", type(raw).__name__)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def overrides_tokens(self) -> list[str]:
        """Flatten the configured overrides into alternating name/color tokens."""

        tokens: list[str] = []
        for name, color in self.overrides.items():
            tokens.extend((name, color))
        return tokens
