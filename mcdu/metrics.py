"""Prometheus metrics for the relay.

All collectors live on a dedicated registry so importing this module twice
(tests, reloads) never collides with the process-wide default registry.
"""
from __future__ import annotations

import logging

from prometheus_client import CollectorRegistry, Counter, Gauge, start_http_server

logger = logging.getLogger(__name__)

REGISTRY = CollectorRegistry(auto_describe=True)

frames_total = Counter(
    'mcdu_frames_total', 'Text frames received, by command', ['command'], registry=REGISTRY,
)
updates_enqueued_total = Counter(
    'mcdu_updates_enqueued_total', 'Decoded screen updates pushed onto the relay queue', registry=REGISTRY,
)
decode_errors_total = Counter(
    'mcdu_decode_errors_total', 'Update frames discarded because decoding failed', ['reason'], registry=REGISTRY,
)
queue_dropped_total = Counter(
    'mcdu_queue_dropped_total', 'Updates dropped by the relay queue overflow policy', ['policy'], registry=REGISTRY,
)
queue_pending = Gauge(
    'mcdu_queue_pending', 'Updates waiting for the consumer', registry=REGISTRY,
)
connections_active = Gauge(
    'mcdu_connections_active', 'Open relay connections', registry=REGISTRY,
)

_server_started = False

def start_metrics_server(host: str, port: int) -> bool:
    """Expose REGISTRY over HTTP. Returns False if already running or bind fails."""
    global _server_started
    if _server_started:
        return False
    try:
        start_http_server(port, addr=host, registry=REGISTRY)
    except OSError as e:
        logger.error("metrics: cannot bind %s:%d: %s", host, port, e)
        return False
    _server_started = True
    logger.info("metrics: exporter listening on %s:%d", host, port)
    return True

def sample(name: str, labels: dict[str, str] | None = None) -> float:
    """Current value of a sample, 0.0 when never observed."""
    value = REGISTRY.get_sample_value(name, labels or {})
    return value if value is not None else 0.0

__all__ = [
    'REGISTRY',
    'connections_active',
    'decode_errors_total',
    'frames_total',
    'queue_dropped_total',
    'queue_pending',
    'sample',
    'start_metrics_server',
    'updates_enqueued_total',
]
