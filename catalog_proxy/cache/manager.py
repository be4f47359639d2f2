"""
Read-through cache orchestration in front of the upstream fetcher.
"""
import logging
import threading
from typing import Any, Dict, Optional

from catalog_proxy.upstream import UpstreamFetcher

from .core import TTLCache

logger = logging.getLogger("cache.manager")

_MISSING = object()


class CacheManager:
    """
    Check the store, fall through to the upstream on a miss, populate on success.

    - Hits are served without touching the network
    - Only successful payloads are stored; upstream errors propagate unchanged
    - With no store (caching disabled) every call goes upstream

    Concurrent misses for the same URL are not coalesced: each caller
    fetches and each one populates the store.
    """

    def __init__(self, fetcher: Any, cache: Optional[TTLCache] = None):
        """
        Initialize the cache manager.

        Args:
            fetcher: Object exposing fetch_json(url)
            cache: Store to read through; None disables caching
        """
        self._fetcher = fetcher
        self._cache = cache
        self._stats_lock = threading.Lock()
        self._upstream_calls = 0

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    @property
    def cache(self) -> Optional[TTLCache]:
        return self._cache

    def cached_fetch(self, url: str) -> Any:
        """
        Return the JSON payload for url, from the store when possible.

        Raises:
            UpstreamError: any failure from the fetcher, unchanged
        """
        if self._cache is None:
            return self._fetch(url)

        hit = self._cache.get(url, _MISSING)
        if hit is not _MISSING:
            logger.debug(f"CACHE HIT: {url}")
            return hit

        logger.info(f"CACHE MISS: {url}")
        data = self._fetch(url)
        self._cache.set(url, data)
        return data

    def _fetch(self, url: str) -> Any:
        with self._stats_lock:
            self._upstream_calls += 1
        return self._fetcher.fetch_json(url)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._stats_lock:
            upstream_calls = self._upstream_calls

        stats: Dict[str, Any] = {
            "enabled": self.enabled,
            "upstream_calls": upstream_calls,
        }
        if self._cache is not None:
            store = self._cache.get_stats()
            lookups = store["hits"] + store["misses"]
            hit_rate = (store["hits"] / lookups * 100) if lookups > 0 else 0
            stats.update(store)
            stats["hit_rate_percent"] = round(hit_rate, 1)
        return stats


def build_cache_manager(settings: Any, fetcher: Any = None) -> CacheManager:
    """
    Build the manager for one app from its settings.

    No store is created at all when settings.enable_cache is off.
    """
    if fetcher is None:
        fetcher = UpstreamFetcher(timeout=settings.upstream_timeout_seconds)

    cache = None
    if settings.enable_cache:
        cache = TTLCache(max_entries=settings.cache_max, ttl_ms=settings.cache_ttl_ms)
    return CacheManager(fetcher, cache)
