"""Environment flag helpers.

Interprets environment variables as boolean feature flags using the canonical
truthy set {"1","true","yes","on"} (case-insensitive).

Usage:
    from mcdu.utils.env_flags import is_truthy_env
    if is_truthy_env('MCDU_JSON_LOGS'):
        ...
"""
from __future__ import annotations

import os

TRUTHY_SET: set[str] = {"1","true","yes","on"}
FALSY_SET: set[str] = {"0","false","no","off"}

def is_truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_SET

def is_truthy_env(name: str, default: str | None = None) -> bool:
    return is_truthy(os.getenv(name, default or ''))

def bool_env(name: str, default: bool) -> bool:
    """Tri-state lookup: unset or unrecognized values yield ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in TRUTHY_SET:
        return True
    if val in FALSY_SET:
        return False
    return default

__all__ = [
    'TRUTHY_SET',
    'FALSY_SET',
    'is_truthy',
    'is_truthy_env',
    'bool_env',
]
