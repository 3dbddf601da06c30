"""Leaderboard reads with validation and per-type cache lifetimes.

Each leaderboard type gets its own TTL: daily rankings change quickly,
the summary rarely. Fetches go through an injected LeaderboardBackend
(normally `clients.timeline_api.TimelineApiClient`).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from core.errors import ValidationError
from core.interfaces import LeaderboardBackend

from .cache import LeaderboardCache

logger = logging.getLogger(__name__)

RankedKind = Literal["global", "category", "daily", "weekly"]

TTL_SECONDS: Dict[str, float] = {
    "global": 120.0,
    "category": 180.0,
    "daily": 60.0,
    "weekly": 300.0,
    "player": 120.0,
    "summary": 600.0,
}

GLOBAL_SORT_FIELDS = frozenset(
    {"total_score", "average_accuracy", "total_games_played", "win_rate", "average_score_per_game"}
)
PERIOD_SORT_FIELDS = frozenset({"total_score", "accuracy", "games_played", "win_rate", "average_score"})
SORT_ORDERS = frozenset({"desc", "asc"})

DEFAULT_LIMITS: Dict[str, int] = {"global": 100, "category": 50, "daily": 50, "weekly": 50}
MAX_LIMIT = 100


def _validate_sort(kind: str, sort_by: str, order: str) -> None:
    fields = GLOBAL_SORT_FIELDS if kind == "global" else PERIOD_SORT_FIELDS
    if sort_by not in fields:
        raise ValidationError(f"Invalid sort field: {sort_by}")
    if order not in SORT_ORDERS:
        raise ValidationError(f"Invalid sort order: {order}")


def _validate_limit(limit: int) -> int:
    n = int(limit)
    if n < 1 or n > MAX_LIMIT:
        raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}")
    return n


class LeaderboardService:
    def __init__(self, *, backend: LeaderboardBackend, cache: LeaderboardCache) -> None:
        self._backend = backend
        self._cache = cache

    async def get_leaderboard(
        self,
        kind: RankedKind,
        *,
        limit: Optional[int] = None,
        sort_by: str = "total_score",
        order: str = "desc",
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Ranked rows for one leaderboard, cached per (kind, params)."""
        if kind not in DEFAULT_LIMITS:
            raise ValidationError(f"Invalid leaderboard: {kind}")

        order = (order or "desc").lower()
        _validate_sort(kind, sort_by, order)
        n = _validate_limit(DEFAULT_LIMITS[kind] if limit is None else limit)

        params: Dict[str, Any] = {"limit": n, "sortBy": sort_by, "order": order}
        if kind == "category":
            name = (category or "").strip()
            if not name:
                raise ValidationError("category is required for the category leaderboard")
            params["category"] = name

        async def _fetch() -> List[Dict[str, Any]]:
            rows = await self._backend.fetch_leaderboard(kind, params)
            logger.info("%s leaderboard retrieved: %d players", kind.capitalize(), len(rows))
            return rows

        return await self._cache.get_or_fetch(kind, _fetch, params, TTL_SECONDS[kind])

    async def get_player_rankings(self, player_name: str) -> Dict[str, Any]:
        name = (player_name or "").strip()
        if not name:
            raise ValidationError("Player name is required")

        async def _fetch() -> Dict[str, Any]:
            return await self._backend.fetch_player_rankings(name)

        return await self._cache.get_or_fetch("player", _fetch, {"playerName": name}, TTL_SECONDS["player"])

    async def get_summary(self) -> Dict[str, Any]:
        return await self._cache.get_or_fetch(
            "summary",
            self._backend.fetch_leaderboard_summary,
            None,
            TTL_SECONDS["summary"],
        )

    def invalidate_for(self, *, player_name: Optional[str] = None, category: Optional[str] = None) -> int:
        """Drop caches affected by a newly recorded game.

        Global, daily, weekly and summary always go; player and category
        entries only when named.
        """
        removed = 0
        if player_name:
            removed += int(self._cache.invalidate("player", {"playerName": player_name.strip()}))
        if category:
            wanted = f"category={category.strip()}"
            for key in self._cache.cache.keys():
                if isinstance(key, str) and key.startswith("leaderboard:category:") and wanted in key.split(":"):
                    removed += int(self._cache.cache.delete(key))
        for kind in ("global", "daily", "weekly", "summary"):
            removed += self._cache.invalidate_type(kind)

        logger.info(
            "Leaderboard caches invalidated%s%s",
            f" for player: {player_name}" if player_name else "",
            f" for category: {category}" if category else "",
        )
        return removed

    def invalidate_all(self) -> int:
        return self._cache.invalidate_all()

    def cache_stats(self) -> Dict[str, Any]:
        return self._cache.get_stats()
