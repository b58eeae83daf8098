"""TTL cache layer for raw release data and built dashboards."""

from __future__ import annotations

from .config import CacheBackend, CacheConfig, build_cache_store
from .durable import FileCacheStore
from .errors import CacheKeyError
from .keys import KEY_DELIMITER, CacheKind, cache_key, parse_cache_kind
from .store import CacheEntry, CacheStatus, CacheStore, Clock, MemoryCacheStore

__all__ = [
    "KEY_DELIMITER",
    "CacheBackend",
    "CacheConfig",
    "CacheEntry",
    "CacheKeyError",
    "CacheKind",
    "CacheStatus",
    "CacheStore",
    "Clock",
    "FileCacheStore",
    "MemoryCacheStore",
    "build_cache_store",
    "cache_key",
    "parse_cache_kind",
]
