"""Locate ``mediatorkit.toml`` for the settings layer.

``MEDIATORKIT_CONFIG`` pins the file explicitly; otherwise the search
starts at the given directory and climbs towards the filesystem root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "mediatorkit.toml"
CONFIG_ENV_VAR = "MEDIATORKIT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``mediatorkit.toml`` at or above *start*, or None.

    A ``MEDIATORKIT_CONFIG`` value that is not an existing file disables
    discovery instead of falling back to the walk-up search.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
