"""Version of the MCDU display package.

An installed distribution reports its own metadata; a source checkout falls
back to ``__version__``. ``MCDU_VERSION`` overrides both so a deployment can
stamp the relay's /openapi.json and ``mcdu --version`` with a build id.
"""
from __future__ import annotations

import os
from importlib import metadata

DIST_NAME = "mcdu-display"
__version__ = "0.1.0"


def _installed_version() -> str | None:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_version() -> str:
    override = (os.environ.get("MCDU_VERSION") or "").strip()
    if override:
        return override
    return _installed_version() or __version__


__all__ = ["DIST_NAME", "__version__", "get_version"]
