"""Runtime configuration snapshot.

A small, typed, frozen view of the environment variables the display reads.
Modules call ``get_runtime_config()`` instead of scattering os.getenv calls.

Env:
  MCDU_RELAY_HOST / MCDU_RELAY_PORT      listener address (127.0.0.1:8380)
  MCDU_QUEUE_CAPACITY                    pending updates kept (256)
  MCDU_QUEUE_OVERFLOW                    drop_oldest | drop_newest | reject
  MCDU_STRICT_MARKUP                     unknown tags fail the update (on)
  MCDU_REFRESH_HZ                        consumer ticks per second (10)
  MCDU_METRICS_ENABLED / _HOST / _PORT   prometheus exporter (off, 0.0.0.0, 9108)
  MCDU_LOG_LEVEL / MCDU_LOG_FILE         logging
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from mcdu.utils.env_flags import bool_env

logger = logging.getLogger(__name__)

__all__ = [
    "OVERFLOW_POLICIES",
    "RelaySettings",
    "MetricsSettings",
    "DisplaySettings",
    "LoggingSettings",
    "RuntimeConfig",
    "build_runtime_config",
    "get_runtime_config",
]

OVERFLOW_POLICIES = ("drop_oldest", "drop_newest", "reject")

DEFAULT_RELAY_HOST = "127.0.0.1"
DEFAULT_RELAY_PORT = 8380
DEFAULT_QUEUE_CAPACITY = 256
DEFAULT_REFRESH_HZ = 10.0
DEFAULT_METRICS_PORT = 9108

@dataclass(frozen=True)
class RelaySettings:
    host: str = DEFAULT_RELAY_HOST
    port: int = DEFAULT_RELAY_PORT
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    overflow: str = "drop_oldest"
    strict_markup: bool = True

@dataclass(frozen=True)
class MetricsSettings:
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = DEFAULT_METRICS_PORT

@dataclass(frozen=True)
class DisplaySettings:
    refresh_hz: float = DEFAULT_REFRESH_HZ

@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    file: str | None = None

@dataclass(frozen=True)
class RuntimeConfig:
    relay: RelaySettings
    metrics: MetricsSettings
    display: DisplaySettings
    logging: LoggingSettings

_singleton: RuntimeConfig | None = None

def _env_int(name: str, default: int, minimum: int = 0) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        parsed = int(val)
    except ValueError:
        logger.warning("config: %s=%r is not an integer, using %d", name, val, default)
        return default
    if parsed < minimum:
        logger.warning("config: %s=%d below minimum %d, using %d", name, parsed, minimum, default)
        return default
    return parsed

def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    try:
        parsed = float(val) if val and val.strip() else default
    except ValueError:
        logger.warning("config: %s=%r is not a number, using %s", name, val, default)
        return default
    if not math.isfinite(parsed) or parsed <= 0:
        logger.warning("config: %s must be a positive finite number, using %s", name, default)
        return default
    return parsed

def _env_policy(name: str, default: str) -> str:
    val = (os.getenv(name) or "").strip().lower().replace("-", "_")
    if not val:
        return default
    if val not in OVERFLOW_POLICIES:
        logger.warning("config: %s=%r not one of %s, using %s", name, val, OVERFLOW_POLICIES, default)
        return default
    return val

def build_runtime_config() -> RuntimeConfig:
    relay = RelaySettings(
        host=os.getenv("MCDU_RELAY_HOST", DEFAULT_RELAY_HOST),
        port=_env_int("MCDU_RELAY_PORT", DEFAULT_RELAY_PORT),
        queue_capacity=_env_int("MCDU_QUEUE_CAPACITY", DEFAULT_QUEUE_CAPACITY, minimum=1),
        overflow=_env_policy("MCDU_QUEUE_OVERFLOW", "drop_oldest"),
        strict_markup=bool_env("MCDU_STRICT_MARKUP", True),
    )
    metrics = MetricsSettings(
        enabled=bool_env("MCDU_METRICS_ENABLED", False),
        host=os.getenv("MCDU_METRICS_HOST", "0.0.0.0"),
        port=_env_int("MCDU_METRICS_PORT", DEFAULT_METRICS_PORT),
    )
    return RuntimeConfig(
        relay=relay,
        metrics=metrics,
        display=DisplaySettings(refresh_hz=_env_float("MCDU_REFRESH_HZ", DEFAULT_REFRESH_HZ)),
        logging=LoggingSettings(
            level=os.getenv("MCDU_LOG_LEVEL", "INFO"),
            file=os.getenv("MCDU_LOG_FILE") or None,
        ),
    )

def get_runtime_config(refresh: bool = False) -> RuntimeConfig:
    global _singleton
    if _singleton is None or refresh:
        _singleton = build_runtime_config()
    return _singleton
