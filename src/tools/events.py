"""MCP tools that draw event cards from the timeline back end.

Registers 'draw_events' and 'list_categories', both delegating to an
injected TimelineApiClient.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from clients.timeline_api import TimelineApiClient
from config import HTTP_TIMEOUT, HTTP_VERIFY, TIMELINE_API_BASE_URL
from core.errors import ValidationError


def register(mcp: FastMCP, *, api_client: Optional[TimelineApiClient] = None) -> None:
    client = api_client or TimelineApiClient(
        base_url=TIMELINE_API_BASE_URL,
        timeout=HTTP_TIMEOUT,
        verify=HTTP_VERIFY,
    )

    @mcp.tool(name="draw_events")
    async def draw_events(
        count: int = 5,
        category: Optional[str] = None,
        difficulty: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Draw event cards for a game.

        Params:
          - count: number of cards (default 5).
          - category: only cards from this category (optional).
          - difficulty: only cards of this difficulty level (optional).

        Returns:
          Event objects (id, title, dateOccurred, category, difficulty,
          description). With a filter, at most `count` matching cards in
          the order the back end returned them.

        Raises:
          ValidationError for a non-positive count or a rejected request;
          ExternalServiceError when the back end is unreachable.
        """
        if count <= 0:
            raise ValidationError("count must be positive")

        if category and category.strip():
            events = await client.events_by_category(category)
        elif difficulty is not None:
            events = await client.events_by_difficulty(difficulty)
        else:
            events = await client.random_events(count)

        if category and difficulty is not None:
            events = [e for e in events if e.difficulty == difficulty]

        return [e.to_dict() for e in events[:count]]

    @mcp.tool(name="list_categories")
    async def list_categories() -> List[str]:
        """Return the event categories known to the back end."""
        return await client.list_categories()
