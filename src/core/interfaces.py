"""Core protocol and interface definitions.

Defines the RandomSource protocol used by the feedback generators and the
LeaderboardBackend protocol that the leaderboard service fetches through,
so tests and alternative back ends can be injected.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick one element of a sequence (e.g. `random`)."""
    def choice(self, seq: Sequence[T]) -> T:
        ...


class LeaderboardBackend(Protocol):
    """Contract for the data source behind cached leaderboards."""
    async def fetch_leaderboard(
        self,
        kind: str,
        params: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        ...

    async def fetch_player_rankings(self, player_name: str) -> Dict[str, Any]:
        ...

    async def fetch_leaderboard_summary(self) -> Dict[str, Any]:
        ...
