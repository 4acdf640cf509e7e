"""Locate a site's ``cloverville.toml``.

``CLOVERVILLE_CONFIG`` names the file outright; otherwise the nearest
``cloverville.toml`` in the starting directory or one of its ancestors
wins, so a page nested under ``pages/`` still finds the site config.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "cloverville.toml"
CONFIG_ENV_VAR = "CLOVERVILLE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    A ``CLOVERVILLE_CONFIG`` pointing at a missing file disables the
    walk-up instead of falling back to it.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )
