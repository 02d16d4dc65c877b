"""Locate ``tourney.toml`` for the current project.

``TOURNEY_CONFIG`` names the file outright. Otherwise the nearest
``tourney.toml`` in the start directory or any of its ancestors wins,
the same way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "tourney.toml"
CONFIG_ENV_VAR = "TOURNEY_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    A ``TOURNEY_CONFIG`` pointing at a missing file yields None rather
    than falling back to the walk-up search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        explicit = Path(override)
        return explicit if explicit.is_file() else None

    base = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (base, *base.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )
