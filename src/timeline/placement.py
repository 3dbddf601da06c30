"""Chronological placement validation.

Given a timeline of events and a proposed insertion index for a new card,
compute the correct index and build a PlacementResult with feedback.

Every entry point sorts a copy of the timeline first, so callers may pass
cards in any order. For an already sorted timeline this is a no-op.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.errors import ValidationError
from core.interfaces import RandomSource
from core.models import Event, PlacementResult

from .feedback import generate_exact_match_feedback, generate_missed_feedback

logger = logging.getLogger(__name__)


def sort_timeline(timeline: Iterable[Event]) -> List[Event]:
    # Stable: cards sharing a date keep their relative order
    return sorted(timeline, key=lambda e: e.date_occurred)


def find_correct_position(card: Event, timeline: Iterable[Event]) -> int:
    """Smallest index i with card date <= timeline[i] date, else len(timeline)."""
    ordered = sort_timeline(timeline)
    for i, event in enumerate(ordered):
        if card.date_occurred <= event.date_occurred:
            return i
    return len(ordered)


def validate_placement_with_tolerance(
    card: Event,
    timeline: Iterable[Event],
    user_position: int,
    *,
    rng: Optional[RandomSource] = None,
) -> PlacementResult:
    """Validate a placement; only the exact index counts as correct.

    The name keeps the historical "tolerance" wording, but close placements
    never earn credit: `is_close` is always False.
    """
    if isinstance(user_position, bool) or not isinstance(user_position, int):
        raise ValidationError(f"user_position must be an integer, got {user_position!r}")
    position = user_position
    if position < 0:
        raise ValidationError("user_position must be non-negative")

    ordered = sort_timeline(timeline)
    correct_position = find_correct_position(card, ordered)
    position_diff = abs(position - correct_position)
    is_exact = position_diff == 0

    if is_exact:
        feedback = generate_exact_match_feedback(card, rng=rng)
    else:
        feedback = generate_missed_feedback(card, position, correct_position, ordered, rng=rng)

    logger.debug(
        "placement card=%r user=%d correct=%d diff=%d",
        card.title,
        position,
        correct_position,
        position_diff,
    )

    return PlacementResult(
        is_correct=is_exact,
        is_close=False,
        correct_position=correct_position,
        user_position=position,
        position_diff=position_diff,
        feedback_type="perfect" if is_exact else "miss",
        feedback=feedback,
    )
