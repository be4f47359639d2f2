"""
Read-through response cache with LRU eviction and lazy TTL expiry.
"""
from .core import CacheEntry, TTLCache
from .manager import CacheManager, build_cache_manager

__all__ = [
    # Core types
    "CacheEntry",
    "TTLCache",
    # Manager
    "CacheManager",
    "build_cache_manager",
]
