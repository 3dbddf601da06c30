"""Keyed cache-aside wrapper for leaderboard queries.

Builds deterministic cache keys from a leaderboard type and its query
parameters, and memoizes the result of an async fetch function per key in
an injected TTLCache. Keys share the "leaderboard:" namespace so they can
be dropped together.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from core.cache import TTLCache
from core.errors import InvalidLeaderboardTypeError

logger = logging.getLogger(__name__)

NAMESPACE = "leaderboard:"

PREFIXES: Dict[str, str] = {
    "global": "leaderboard:global",
    "category": "leaderboard:category",
    "daily": "leaderboard:daily",
    "weekly": "leaderboard:weekly",
    "player": "leaderboard:player",
    "summary": "leaderboard:summary",
}

FetchFn = Callable[[], Awaitable[Any]]


class LeaderboardCache:
    """Cache-aside access to leaderboard data.

    Concurrent misses for the same key each run their own fetch unless
    `dedupe_in_flight` is set, in which case callers share the first
    caller's pending fetch until it settles.
    """

    def __init__(self, cache: TTLCache, *, dedupe_in_flight: bool = False) -> None:
        self._cache = cache
        self._dedupe = bool(dedupe_in_flight)
        self._in_flight: Dict[str, "asyncio.Future[Any]"] = {}

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def generate_key(self, type: str, params: Optional[Mapping[str, Any]] = None) -> str:
        prefix = PREFIXES.get(type)
        if prefix is None:
            raise InvalidLeaderboardTypeError(f"Invalid leaderboard type: {type}")

        # Sorted by name so parameter order never changes the key
        items = sorted((params or {}).items())
        param_string = ":".join(f"{k}={v}" for k, v in items)
        return f"{prefix}:{param_string}" if param_string else prefix

    async def get_or_fetch(
        self,
        type: str,
        fetch_fn: FetchFn,
        params: Optional[Mapping[str, Any]] = None,
        ttl: float = 300.0,
    ) -> Any:
        key = self.generate_key(type, params)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Leaderboard cache HIT: %s", key)
            return cached

        logger.debug("Leaderboard cache MISS: %s", key)
        if not self._dedupe:
            return await self._fetch_and_store(key, fetch_fn, ttl)

        pending = self._in_flight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_store(key, fetch_fn, ttl))
            self._in_flight[key] = pending
            pending.add_done_callback(functools.partial(self._settle, key))
        # shield: one cancelled waiter must not cancel the shared fetch
        return await asyncio.shield(pending)

    def invalidate(self, type: str, params: Optional[Mapping[str, Any]] = None) -> bool:
        key = self.generate_key(type, params)
        deleted = self._cache.delete(key)
        if deleted:
            logger.info("Leaderboard cache INVALIDATED: %s", key)
        return deleted

    def invalidate_type(self, type: str) -> int:
        # Every key of one type, whatever its params
        prefix = self.generate_key(type)
        invalidated = 0
        for key in self._cache.keys():
            if isinstance(key, str) and (key == prefix or key.startswith(prefix + ":")):
                if self._cache.delete(key):
                    invalidated += 1
        if invalidated:
            logger.info("Leaderboard cache INVALIDATED: %d %s entries", invalidated, type)
        return invalidated

    def invalidate_all(self) -> int:
        invalidated = 0
        for key in self._cache.keys():
            if isinstance(key, str) and key.startswith(NAMESPACE):
                if self._cache.delete(key):
                    invalidated += 1
        if invalidated:
            logger.info("Leaderboard cache INVALIDATED: %d entries", invalidated)
        return invalidated

    def get_stats(self) -> Dict[str, Any]:
        stats = self._cache.get_stats()
        stats["leaderboard_entries"] = sum(
            1 for k in self._cache.keys() if isinstance(k, str) and k.startswith(NAMESPACE)
        )
        stats["in_flight"] = len(self._in_flight)
        return stats

    async def _fetch_and_store(self, key: str, fetch_fn: FetchFn, ttl: float) -> Any:
        data = await fetch_fn()
        # None is never stored; get() could not tell it from a miss
        if data is not None:
            self._cache.set(key, data, ttl)
        return data

    def _settle(self, key: str, future: "asyncio.Future[Any]") -> None:
        self._in_flight.pop(key, None)
        # exception() marks the error retrieved even when no waiter is left
        if not future.cancelled() and future.exception() is not None:
            logger.debug("Leaderboard fetch failed: %s", key)
