"""Version of the plasma transaction core; override with $PLASMA_VERSION at build time."""

from __future__ import annotations

import os

__version__ = os.getenv("PLASMA_VERSION", "0.1.0")
