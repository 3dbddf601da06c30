"""Small in-memory TTL cache with LRU eviction and hit/miss statistics.

Store values with a monotonic expiration timestamp and evict the least
recently accessed entry when the cache is full. Expired entries are
treated as absent by every read and removed lazily or by `cleanup()`.

The cache is an optimization layer: internal failures are logged and
degrade to a miss (reads) or a no-op (writes), never an exception.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    # Stores value + monotonic timestamps (time.monotonic())
    value: T
    expires_at: float
    created_at: float
    accessed_at: float


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    size: int = 0


def _percent(numerator: float, denominator: float) -> str:
    return f"{numerator / denominator * 100:.2f}%"


class TTLCache(Generic[T]):
    # OrderedDict order == access order, so the first item is the LRU entry
    def __init__(self, *, ttl_seconds: float = 300.0, maxsize: int = 1000) -> None:
        self._ttl = float(ttl_seconds)
        self._maxsize = max(1, int(maxsize))
        self._store: "OrderedDict[object, CacheEntry[T]]" = OrderedDict()
        self._stats = CacheStats()

    @property
    def default_ttl(self) -> float:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        return len(self._store)

    def set(self, key: object, value: T, ttl: Optional[float] = None) -> None:
        try:
            now = time.monotonic()
            ttl_seconds = self._ttl if ttl is None else float(ttl)

            if key in self._store:
                self._store.move_to_end(key, last=True)
            else:
                while len(self._store) >= self._maxsize:
                    self._evict_oldest()

            self._store[key] = CacheEntry(
                value=value,
                expires_at=now + ttl_seconds,
                created_at=now,
                accessed_at=now,
            )
            self._stats.sets += 1
            self._stats.size = len(self._store)
            logger.debug("Cache SET: %s (ttl=%.3fs)", key, ttl_seconds)
        except Exception:
            logger.exception("Error setting cache value for %r", key)

    def get(self, key: object) -> Optional[T]:
        try:
            entry = self._store.get(key)
            if entry is None:
                self._stats.misses += 1
                logger.debug("Cache MISS: %s", key)
                return None

            now = time.monotonic()
            if now > entry.expires_at:
                del self._store[key]
                self._stats.misses += 1
                self._stats.size = len(self._store)
                logger.debug("Cache EXPIRED: %s", key)
                return None

            # Mark as recently used
            entry.accessed_at = now
            self._store.move_to_end(key, last=True)
            self._stats.hits += 1
            logger.debug("Cache HIT: %s", key)
            return entry.value
        except Exception:
            logger.exception("Error getting cache value for %r", key)
            return None

    def delete(self, key: object) -> bool:
        try:
            if self._store.pop(key, None) is None:
                return False
            self._stats.deletes += 1
            self._stats.size = len(self._store)
            logger.debug("Cache DELETE: %s", key)
            return True
        except Exception:
            logger.exception("Error deleting cache value for %r", key)
            return False

    def has(self, key: object) -> bool:
        # Same expiry rule as get(), without touching recency or hit/miss stats
        try:
            entry = self._store.get(key)
            if entry is None:
                return False
            if time.monotonic() > entry.expires_at:
                del self._store[key]
                self._stats.size = len(self._store)
                return False
            return True
        except Exception:
            logger.exception("Error checking cache key %r", key)
            return False

    def keys(self) -> List[object]:
        # Snapshot, so callers may delete while iterating
        return list(self._store.keys())

    def clear(self) -> None:
        removed = len(self._store)
        self._store.clear()
        self._stats.size = 0
        logger.info("Cache CLEARED: %d entries removed", removed)

    def cleanup(self) -> int:
        try:
            now = time.monotonic()
            expired = [k for k, e in self._store.items() if now > e.expires_at]
            for k in expired:
                del self._store[k]
            self._stats.size = len(self._store)
            if expired:
                logger.info("Cache CLEANUP: %d expired entries removed", len(expired))
            return len(expired)
        except Exception:
            logger.exception("Error cleaning up cache")
            return 0

    def get_stats(self) -> Dict[str, Any]:
        s = self._stats
        total = s.hits + s.misses
        return {
            "hits": s.hits,
            "misses": s.misses,
            "sets": s.sets,
            "deletes": s.deletes,
            "size": s.size,
            "hit_rate": _percent(s.hits, total) if total else "0%",
            "total_requests": total,
            "cache_size": len(self._store),
            "max_size": self._maxsize,
            "utilization": _percent(len(self._store), self._maxsize),
        }

    def reset_stats(self) -> None:
        self._stats = CacheStats(size=len(self._store))

    def set_max_size(self, maxsize: int) -> None:
        if maxsize > 0:
            self._maxsize = int(maxsize)
            logger.info("Cache max size updated: %d", self._maxsize)

    def set_default_ttl(self, ttl_seconds: float) -> None:
        if ttl_seconds > 0:
            self._ttl = float(ttl_seconds)
            logger.info("Cache default TTL updated: %.3fs", self._ttl)

    def _evict_oldest(self) -> None:
        key, _ = self._store.popitem(last=False)
        self._stats.size = len(self._store)
        logger.debug("Cache EVICTED (LRU): %s", key)
