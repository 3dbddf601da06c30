"""Timeline back end client: event cards and leaderboard reads over REST.

Small async client for the timeline game's HTTP API. Responses use a
`{"success": bool, "data": ...}` envelope; event payloads are parsed into
`core.models.Event`. Leaderboard reads are plain fetches here; caching
lives in `leaderboards.service.LeaderboardService`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from core.errors import ExternalServiceError, NotFoundError, ValidationError
from core.models import Event


class TimelineApiClient:
    """Async client for the timeline REST API.

    Purpose:
      - list_events(), random_events(count), events_by_category(category),
        events_by_difficulty(level), list_categories()
      - fetch_leaderboard(kind, params), fetch_player_rankings(name),
        fetch_leaderboard_summary()
    """

    USER_AGENT = "timeline-mcp-server"

    def __init__(self, *, base_url: str, timeout: float = 10.0, verify: bool = False) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = float(timeout)
        self._verify = bool(verify)

    # --- events ---

    async def list_events(self) -> List[Event]:
        return self._events(await self._get_data("/api/events", context="list_events"))

    async def random_events(self, count: int) -> List[Event]:
        n = int(count)
        if n <= 0:
            raise ValidationError("count must be positive")
        data = await self._get_data(f"/api/events/random/{n}", context="random_events")
        return self._events(data)

    async def events_by_category(self, category: str) -> List[Event]:
        name = (category or "").strip()
        if not name:
            raise ValidationError("category must be non-empty")
        data = await self._get_data(f"/api/events/category/{name}", context="events_by_category")
        return self._events(data)

    async def events_by_difficulty(self, level: int) -> List[Event]:
        data = await self._get_data(f"/api/events/difficulty/{int(level)}", context="events_by_difficulty")
        return self._events(data)

    async def list_categories(self) -> List[str]:
        data = await self._get_data("/api/categories", context="list_categories")
        return [str(c) for c in data or []]

    # --- leaderboards ---

    async def fetch_leaderboard(self, kind: str, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        query = {k: v for k, v in params.items() if v is not None}
        data = await self._get_data(
            f"/api/statistics/leaderboards/{kind}",
            params=query,
            context=f"fetch_leaderboard({kind})",
        )
        return list(data or [])

    async def fetch_player_rankings(self, player_name: str) -> Dict[str, Any]:
        data = await self._get_data(
            f"/api/statistics/leaderboards/player/{player_name}",
            context="fetch_player_rankings",
        )
        return dict(data or {})

    async def fetch_leaderboard_summary(self) -> Dict[str, Any]:
        data = await self._get_data("/api/statistics/leaderboards/summary", context="fetch_leaderboard_summary")
        return dict(data or {})

    # --- HTTP helpers ---

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json", "User-Agent": self.USER_AGENT},
            timeout=self._timeout,
            verify=self._verify,
        )

    def _events(self, data: Any) -> List[Event]:
        if not isinstance(data, list):
            raise ExternalServiceError("Timeline API returned a non-list event payload")
        return [Event.from_dict(item) for item in data]

    async def _get_data(
        self,
        url: str,
        *,
        context: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        try:
            async with self._create_client() as client:
                resp = await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Timeline API request failed ({context}): {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f"Not found: {url}")
        if resp.status_code == 400:
            raise ValidationError(self._error_message(resp) or f"Bad request: {url}")

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(f"Timeline API returned an error ({context}): {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"Timeline API returned invalid JSON ({context})") from e

        if not isinstance(body, dict) or not body.get("success", False):
            message = body.get("error") if isinstance(body, dict) else None
            raise ExternalServiceError(f"Timeline API reported failure ({context}): {message or 'unknown error'}")

        return body.get("data")

    @staticmethod
    def _error_message(resp: httpx.Response) -> Optional[str]:
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return None
