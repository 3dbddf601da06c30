"""Insertion-point hints for the timeline.

A timeline of N cards has N+1 slots: one before the first card, one between
each adjacent pair and one after the last. Each slot is tagged with a
difficulty derived from the year gap around it and, when a card is
selected, a relevance score.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Optional

from core.dates import DateLike, parse_date
from core.models import Event, InsertionPoint, PointDifficulty

from .placement import sort_timeline

BASE_RELEVANCE = 0.5

_EASY_GAP_YEARS = 50
_HARD_GAP_YEARS = 10

_NEAR_REFERENCE = timedelta(days=365 * 5)
_FAR_REFERENCE = timedelta(days=365 * 20)


def _gap_difficulty(gap: int) -> PointDifficulty:
    # Exactly 10 or 50 years falls through to medium
    difficulty: PointDifficulty = "medium"
    if gap > _EASY_GAP_YEARS:
        difficulty = "easy"
    if gap < _HARD_GAP_YEARS:
        difficulty = "hard"
    return difficulty


def generate_smart_insertion_points(
    timeline: Iterable[Event],
    selected_card: Optional[Event] = None,
    *,
    score_relevance: bool = False,
) -> List[InsertionPoint]:
    """Build the N+1 insertion points for `timeline`.

    With `selected_card`, every point gets the flat base relevance, or the
    stepped score from `calculate_insertion_point_relevance` when
    `score_relevance` is set.
    """
    ordered = sort_timeline(timeline)

    if not ordered:
        points = [
            InsertionPoint(
                index=0,
                position="before",
                reference_card=None,
                difficulty="easy",
                hint="First position",
            )
        ]
    else:
        points = [
            InsertionPoint(
                index=0,
                position="before",
                reference_card=ordered[0],
                difficulty="easy",
                hint=f"Before {ordered[0].year}",
            )
        ]

        for i in range(len(ordered) - 1):
            current, following = ordered[i], ordered[i + 1]
            gap = following.year - current.year
            points.append(
                InsertionPoint(
                    index=i + 1,
                    position="between",
                    reference_card=current,
                    next_card=following,
                    difficulty=_gap_difficulty(gap),
                    gap=gap,
                    hint=f"Between {current.year} and {following.year}",
                )
            )

        last = ordered[-1]
        points.append(
            InsertionPoint(
                index=len(ordered),
                position="after",
                reference_card=last,
                difficulty="easy",
                hint=f"After {last.year}",
            )
        )

    if selected_card is None:
        return points

    if score_relevance:
        return [
            p.with_relevance(calculate_insertion_point_relevance(p, selected_card.date_occurred))
            for p in points
        ]
    return [p.with_relevance(BASE_RELEVANCE) for p in points]


def calculate_insertion_point_relevance(insertion_point: InsertionPoint, card_date: DateLike) -> float:
    """Score how well `card_date` fits a slot.

    A discrete step function; the only possible results are
    1.0, 0.9, 0.7, 0.3 and 0.5.
    """
    when = parse_date(card_date)
    ref = insertion_point.reference_card
    nxt = insertion_point.next_card

    if ref is None and nxt is None:
        return 0.5

    if ref is not None and nxt is not None:
        total_gap = nxt.date_occurred - ref.date_occurred
        if total_gap == timedelta(0):
            return 1.0
        ratio = (when - ref.date_occurred) / total_gap
        if ratio == 0.5:
            return 1.0
        if abs(ratio - 0.5) < 0.1:
            return 0.9
        if abs(ratio - 0.5) < 0.3:
            return 0.7
        return 0.3

    if ref is not None:
        diff = abs(when - ref.date_occurred)
        if diff < _NEAR_REFERENCE:
            return 0.9
        if diff < _FAR_REFERENCE:
            return 0.7
        return 0.3

    return 0.5
