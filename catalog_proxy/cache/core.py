"""
Core cache data structures.
"""
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("cache.core")


@dataclass
class CacheEntry:
    """
    A cached upstream payload and the moment it stops being served.
    """
    key: str
    value: Any
    expires_at: float  # clock() reading, seconds

    def is_expired(self, now: float) -> bool:
        """Check if the entry has reached its expiry."""
        return now >= self.expires_at


class TTLCache:
    """
    Bounded in-memory store with combined LRU and TTL semantics.

    - Every hit and every set moves the entry to the most-recent position
    - Expired entries are dropped lazily, when a get touches them
    - When a set pushes the size past max_entries, the single least
      recently touched entry is evicted

    Expired entries that nobody reads keep occupying a slot until LRU
    pressure evicts them; there is no background sweep.

    Usage:
        cache = TTLCache(max_entries=500, ttl_ms=600_000)
        cache.set("https://openlibrary.org/works/OL1W.json", payload)
        cache.get("https://openlibrary.org/works/OL1W.json")
    """

    def __init__(
        self,
        max_entries: int = 500,
        ttl_ms: int = 600_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            max_entries: Maximum number of resident entries
            ttl_ms: Lifetime applied to every new or refreshed entry
            clock: Seconds-returning clock, injectable for tests
        """
        self.max_entries = max(1, max_entries)
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()

        self._stats = {
            "hits": 0,
            "misses": 0,
            "expirations": 0,
            "evictions": 0,
        }

    def get(self, key: str, default: Any = None) -> Optional[Any]:
        """
        Return the cached value for key, or default on a miss.

        Pass a sentinel as default to tell a stored None from a miss.

        A stale entry is removed and reported as a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return default

            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats["expirations"] += 1
                self._stats["misses"] += 1
                logger.debug(f"Expired: {key}")
                return default

            self._entries.move_to_end(key)
            self._stats["hits"] += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Insert or refresh key at the most-recent position."""
        with self._lock:
            expires_at = self._clock() + self.ttl_ms / 1000.0
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)
            self._entries.move_to_end(key)

            if len(self._entries) > self.max_entries:
                oldest_key, _ = self._entries.popitem(last=False)
                self._stats["evictions"] += 1
                logger.debug(f"Evicted: {oldest_key}")

    def keys(self) -> List[str]:
        """Resident keys, least recently touched first."""
        with self._lock:
            return list(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        # Inspection only: does not refresh recency or check expiry
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "ttl_ms": self.ttl_ms,
                **self._stats,
            }
