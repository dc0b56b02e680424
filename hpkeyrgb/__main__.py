"""`python -m hpkeyrgb` entrypoint.

For installed usage, prefer the `hpkeyrgb` console script.
"""

from __future__ import annotations

import sys

from .cli.entrypoint import main


if __name__ == "__main__":
    sys.exit(main())
