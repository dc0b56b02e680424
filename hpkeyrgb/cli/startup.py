from __future__ import annotations

import logging
import os


def debug_requested() -> bool:
    return bool(os.environ.get("HPKEYRGB_DEBUG"))


def configure_logging(*, debug: bool = False) -> None:
    """Configure root logging for the command line tool.

    If callers already configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if (debug or debug_requested()) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
