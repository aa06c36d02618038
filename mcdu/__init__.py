"""MCDU display core: markup parsing, screen-state decoding and update relay."""
from __future__ import annotations

from .version import __version__, get_version

__all__ = ["__version__", "get_version"]
