"""
In-memory snapshot cache for FAQ entries.

Keeps the per-language entry list between /faqs/ask calls on a warm Lambda.
Writes that go through FaqService invalidate it; the TTL bounds staleness
when another instance edits the table.
"""

import time
from threading import Lock
from typing import Dict, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")


class SnapshotCache:
    """Thread-safe TTL cache keyed by language (or any hashable key)."""

    def __init__(self, ttl_seconds: float = 30, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[object, float]] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: Hashable) -> Optional[object]:
        """Return the cached snapshot if present and fresh."""
        if not self.enabled:
            return None
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                self.misses += 1
                return None

            value, stored_at = item
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                self.misses += 1
                return None

            self.hits += 1
            return value

    def set(self, key: Hashable, value: T) -> T:
        """Store a snapshot and hand it back."""
        if self.enabled:
            with self._lock:
                self._entries[key] = (value, self._clock())
        return value

    def invalidate(self) -> None:
        """Drop every snapshot; called after any write."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            return {
                "size": len(self._entries),
                "ttl_seconds": self.ttl_seconds,
                "hits": self.hits,
                "misses": self.misses,
            }
