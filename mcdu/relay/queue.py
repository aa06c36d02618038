"""Bounded hand-off queue between relay connections and the display consumer.

Producers (connection handlers, any thread) only ``put``; the single consumer
only ``drain``s, once per tick, never blocking. Items leave in arrival order,
so updates from one connection keep their order.

When full, the overflow policy decides:
  drop_oldest  evict the oldest pending update, keep the new one (default)
  drop_newest  discard the incoming update
  reject       raise RelayQueueFull to the producer
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from enum import Enum
from typing import Generic, TypeVar

from mcdu import metrics as m
from mcdu.utils.exceptions import ConfigError, RelayQueueFull

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OverflowPolicy(Enum):
    DROP_OLDEST = "drop_oldest"
    DROP_NEWEST = "drop_newest"
    REJECT = "reject"

    @classmethod
    def parse(cls, value: str | OverflowPolicy) -> OverflowPolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError:
            raise ConfigError(f"unknown overflow policy {value!r}") from None


class UpdateQueue(Generic[T]):
    def __init__(self, capacity: int = 256, overflow: str | OverflowPolicy = OverflowPolicy.DROP_OLDEST):
        if capacity < 1:
            raise ConfigError(f"queue capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self.overflow = OverflowPolicy.parse(overflow)
        self._lock = threading.Lock()
        self._items: deque[T] = deque()
        self._accepted = 0
        self._dropped = 0

    def put(self, item: T) -> bool:
        """Enqueue ``item``. Returns False when the item itself was dropped."""
        with self._lock:
            if len(self._items) >= self.capacity:
                self._dropped += 1
                m.queue_dropped_total.labels(self.overflow.value).inc()
                if self.overflow is OverflowPolicy.REJECT:
                    raise RelayQueueFull(f"relay queue full ({self.capacity} pending)")
                if self.overflow is OverflowPolicy.DROP_NEWEST:
                    logger.debug("relay queue full, discarding incoming update")
                    return False
                self._items.popleft()
                logger.debug("relay queue full, evicted oldest update")
            self._items.append(item)
            self._accepted += 1
            m.queue_pending.set(len(self._items))
            return True

    def drain(self) -> list[T]:
        """Take every pending item, oldest first. Empty list means nothing arrived."""
        with self._lock:
            if not self._items:
                return []
            out = list(self._items)
            self._items.clear()
            m.queue_pending.set(0)
        return out

    @property
    def dropped(self) -> int:
        with self._lock:
            return self._dropped

    @property
    def accepted(self) -> int:
        with self._lock:
            return self._accepted

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"UpdateQueue(capacity={self.capacity}, overflow={self.overflow.value}, pending={len(self)})"


__all__ = ["OverflowPolicy", "UpdateQueue"]
