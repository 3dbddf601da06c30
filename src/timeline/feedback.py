"""Player-facing feedback messages for card placements.

Each generator picks one template from a fixed pool. The pick goes through
an injectable RandomSource so callers (and tests) can pin the template.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from core.interfaces import RandomSource
from core.models import Event


def _pick(templates: Sequence[str], rng: Optional[RandomSource]) -> str:
    return (rng or random).choice(templates)


def _location_hint(correct_position: int, timeline: Sequence[Event]) -> str:
    # timeline must already be sorted ascending
    if not timeline:
        return ""
    if correct_position <= 0:
        return f" It happened before {timeline[0].year}."
    if correct_position >= len(timeline):
        return f" It happened after {timeline[-1].year}."
    before = timeline[correct_position - 1].year
    after = timeline[correct_position].year
    return f" It happened between {before} and {after}."


def generate_exact_match_feedback(card: Event, *, rng: Optional[RandomSource] = None) -> str:
    encouragements = [
        f"🎯 Perfect placement! {card.title} is exactly where it belongs!",
        f"⭐ Excellent! You nailed the exact position for {card.title}!",
        f"🏆 Outstanding! {card.title} is perfectly positioned!",
        f"💎 Brilliant! You've mastered the chronology of {card.title}!",
        f"🎉 Flawless! {card.title} couldn't be placed better!",
    ]
    return _pick(encouragements, rng)


def generate_missed_feedback(
    card: Event,
    user_position: int,
    correct_position: int,
    timeline: Optional[Sequence[Event]] = None,
    *,
    rng: Optional[RandomSource] = None,
) -> str:
    """Explain a wrong placement with the year, decade and a direction hint.

    When the sorted `timeline` is supplied, the message also says which
    neighbouring years the card falls between.
    """
    year = card.year
    decade = (year // 10) * 10

    direction = ""
    if user_position > correct_position:
        direction = " Try looking earlier in the timeline."
    elif user_position < correct_position:
        direction = " Try looking later in the timeline."

    hint = _location_hint(correct_position, timeline or [])

    feedbacks = [
        f"❌ Incorrect placement! {card.title} occurred in {year} ({decade}s).{hint}{direction}",
        f"🚫 Not quite right! {card.title} happened in {year} ({decade}s).{hint}{direction}",
        f"⚠️ Wrong position! {card.title} took place in {year} ({decade}s).{hint}{direction}",
        f"💭 Think again! {card.title} was in {year} ({decade}s).{hint}{direction}",
    ]
    return _pick(feedbacks, rng)


def generate_close_match_feedback(
    card: Event,
    position_diff: int,
    *,
    rng: Optional[RandomSource] = None,
) -> str:
    # Not used by the zero-tolerance validator; kept as a standalone generator.
    year = card.year
    direction = "earlier" if position_diff > 0 else "later"
    encouragements = [
        f"Very close! {card.title} ({year}) should be placed {direction} in the timeline.",
        f"Almost perfect! {card.title} ({year}) is just a bit {direction}.",
        f"Great attempt! {card.title} ({year}) is nearly in the right spot, just try {direction}.",
        f"Good work! {card.title} ({year}) is close, but should be {direction}.",
    ]
    return _pick(encouragements, rng)
