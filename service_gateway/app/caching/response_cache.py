"""
In-memory TTL cache for upstream responses.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from shared.logging import get_logger


@dataclass(frozen=True)
class CachedResponse:
    """A stored upstream response envelope."""

    key: str
    status: int
    content_type: str
    body: bytes
    stored_at: float


class ResponseCache:
    """TTL-keyed response store.

    Entries expire lazily: a stale entry is only removed when a lookup
    finds it. Keys are compared verbatim, so differently formatted paths
    occupy different slots. Concurrent stores to one key are
    last-writer-wins.
    """

    def __init__(self, ttl_ms: int, clock: Callable[[], float] = time.monotonic):
        if ttl_ms < 0:
            raise ValueError("ttl_ms must be non-negative")
        self.ttl_ms = ttl_ms
        self._ttl_seconds = ttl_ms / 1000.0
        self._clock = clock
        self._entries: Dict[str, CachedResponse] = {}
        self._lock = threading.Lock()
        self.logger = get_logger("gateway.response_cache")

    def lookup(self, key: str) -> Optional[CachedResponse]:
        """Return the fresh entry for ``key``, or None on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() - entry.stored_at > self._ttl_seconds:
                del self._entries[key]
                self.logger.debug("Evicted stale cache entry", key=key)
                return None

            return entry

    def store(self, key: str, status: int, content_type: str, body: bytes) -> CachedResponse:
        """Write (or overwrite) the entry for ``key``, whatever the status."""
        entry = CachedResponse(
            key=key,
            status=status,
            content_type=content_type,
            body=body,
            stored_at=self._clock(),
        )
        with self._lock:
            self._entries[key] = entry
        return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
