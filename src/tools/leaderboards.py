"""MCP tools for cached leaderboard reads.

Registers 'get_leaderboard', 'get_player_rankings', 'get_leaderboard_summary',
'invalidate_leaderboards' and 'cache_stats' on top of a shared
LeaderboardService.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from leaderboards.service import LeaderboardService, RankedKind


def register(mcp: FastMCP, *, leaderboard_service: LeaderboardService) -> None:
    service = leaderboard_service

    @mcp.tool(name="get_leaderboard")
    async def get_leaderboard(
        kind: RankedKind = "global",
        limit: Optional[int] = None,
        sort_by: str = "total_score",
        order: str = "desc",
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return ranked players for one leaderboard.

        Params:
          - kind: "global", "category", "daily" or "weekly".
          - limit: 1..100 (defaults: global 100, others 50).
          - sort_by: a stat column, e.g. "total_score" or "win_rate".
          - order: "desc" or "asc".
          - category: required when kind is "category".

        Results are cached for 1-5 minutes depending on the kind.
        """
        return await service.get_leaderboard(
            kind,
            limit=limit,
            sort_by=sort_by,
            order=order,
            category=category,
        )

    @mcp.tool(name="get_player_rankings")
    async def get_player_rankings(player_name: str) -> Dict[str, Any]:
        """Return a player's rank on the global, daily, weekly and category boards."""
        return await service.get_player_rankings(player_name)

    @mcp.tool(name="get_leaderboard_summary")
    async def get_leaderboard_summary() -> Dict[str, Any]:
        """Return player counts, active players and score highlights."""
        return await service.get_summary()

    @mcp.tool(name="invalidate_leaderboards")
    async def invalidate_leaderboards(
        player_name: Optional[str] = None,
        category: Optional[str] = None,
        everything: bool = False,
    ) -> Dict[str, int]:
        """Drop cached leaderboards after new game results.

        With everything=true all leaderboard entries go; otherwise the
        global/daily/weekly/summary boards plus the named player/category.
        """
        if everything:
            removed = service.invalidate_all()
        else:
            removed = service.invalidate_for(player_name=player_name, category=category)
        return {"invalidated": removed}

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, Any]:
        """Return hit/miss counters, hit rate and utilization of the cache."""
        return service.cache_stats()
