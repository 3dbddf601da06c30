"""MCP tools for placing cards on a timeline.

Registers 'find_correct_position', 'validate_placement', 'insertion_points'
and 'insertion_point_relevance'. Cards and timelines arrive as JSON objects
in the back end's event shape (`title`, `dateOccurred`, ...).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from core.errors import ValidationError
from core.interfaces import RandomSource
from core.models import Event
from timeline.insertion_points import calculate_insertion_point_relevance, generate_smart_insertion_points
from timeline.placement import find_correct_position as _find_correct_position
from timeline.placement import validate_placement_with_tolerance


def _parse_card(card: Any) -> Event:
    if not isinstance(card, dict):
        raise ValidationError("card must be an object")
    return Event.from_dict(card)


def _parse_timeline(timeline: Any) -> List[Event]:
    if timeline is None:
        return []
    if not isinstance(timeline, list):
        raise ValidationError("timeline must be a list of events")
    return [_parse_card(item) for item in timeline]


def register(mcp: FastMCP, *, rng: Optional[RandomSource] = None) -> None:
    @mcp.tool(name="find_correct_position")
    async def find_correct_position(card: Dict[str, Any], timeline: List[Dict[str, Any]]) -> int:
        """Return the chronologically correct insertion index for a card.

        Params:
          - card: event object with at least `dateOccurred`.
          - timeline: events already placed (any order; sorted internally).

        Returns:
          Zero-based index into the sorted timeline.
        """
        return _find_correct_position(_parse_card(card), _parse_timeline(timeline))

    @mcp.tool(name="validate_placement")
    async def validate_placement(
        card: Dict[str, Any],
        timeline: List[Dict[str, Any]],
        user_position: int,
    ) -> Dict[str, Any]:
        """Check a proposed placement and return feedback.

        Only the exact index is correct. The result carries isCorrect,
        correctPosition, positionDiff, feedbackType ('perfect' or 'miss')
        and a feedback message naming the event and its year.

        Raises:
          ValidationError for malformed cards, dates or a negative position.
        """
        result = validate_placement_with_tolerance(
            _parse_card(card),
            _parse_timeline(timeline),
            user_position,
            rng=rng,
        )
        return result.to_dict()

    @mcp.tool(name="insertion_points")
    async def insertion_points(
        timeline: List[Dict[str, Any]],
        selected_card: Optional[Dict[str, Any]] = None,
        score_relevance: bool = False,
    ) -> List[Dict[str, Any]]:
        """List the N+1 slots of a timeline with difficulty and hint text.

        With selected_card, each slot also carries a relevance in [0, 1]
        (flat 0.5 unless score_relevance is true).
        """
        selected = _parse_card(selected_card) if selected_card is not None else None
        points = generate_smart_insertion_points(
            _parse_timeline(timeline),
            selected,
            score_relevance=score_relevance,
        )
        return [p.to_dict() for p in points]

    @mcp.tool(name="insertion_point_relevance")
    async def insertion_point_relevance(
        timeline: List[Dict[str, Any]],
        index: int,
        card: Dict[str, Any],
    ) -> float:
        """Score how well a card fits the slot at `index` (0.3 to 1.0)."""
        points = generate_smart_insertion_points(_parse_timeline(timeline))
        if index < 0 or index >= len(points):
            raise ValidationError(f"index must be between 0 and {len(points) - 1}")
        return calculate_insertion_point_relevance(points[index], _parse_card(card).date_occurred)
