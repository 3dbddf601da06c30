"""Immutable dataclasses shared by the placement engine and the MCP tools.

Includes the Event card consumed from the REST back end, the
PlacementResult returned by validation and the InsertionPoint hints
rendered between timeline cards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Literal, Mapping, Optional

from core.dates import parse_date
from core.errors import ValidationError


FeedbackType = Literal["perfect", "miss"]
PointPosition = Literal["before", "between", "after"]
PointDifficulty = Literal["easy", "medium", "hard"]


@dataclass(frozen=True, slots=True)
class Event:
    """A historical event card.

    Field groups:
    - Identity: id, title
    - Placement: date_occurred (UTC, timezone-aware)
    - Presentation: category, difficulty, description
    """

    id: Any
    title: str
    date_occurred: datetime

    category: str = ""
    difficulty: int = 1
    description: str = ""

    def __post_init__(self) -> None:
        # Normalize whatever the caller passed to an aware UTC datetime
        object.__setattr__(self, "date_occurred", parse_date(self.date_occurred))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        # Accept the back end's camelCase shape as well as snake_case
        raw_date = data.get("dateOccurred", data.get("date_occurred"))
        if raw_date is None:
            raise ValidationError("Event is missing dateOccurred")

        try:
            difficulty = int(data.get("difficulty") or 1)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid difficulty: {data.get('difficulty')!r}") from e

        return cls(
            id=data.get("id"),
            title=str(data.get("title") or ""),
            date_occurred=raw_date,
            category=str(data.get("category") or ""),
            difficulty=difficulty,
            description=str(data.get("description") or ""),
        )

    @property
    def year(self) -> int:
        return self.date_occurred.year

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "dateOccurred": self.date_occurred.isoformat(),
            "category": self.category,
            "difficulty": self.difficulty,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class PlacementResult:
    # is_correct <=> position_diff == 0 <=> feedback_type == "perfect"
    is_correct: bool
    is_close: bool
    correct_position: int
    user_position: int
    position_diff: int
    feedback_type: FeedbackType
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isCorrect": self.is_correct,
            "isClose": self.is_close,
            "correctPosition": self.correct_position,
            "userPosition": self.user_position,
            "positionDiff": self.position_diff,
            "feedbackType": self.feedback_type,
            "feedback": self.feedback,
        }


@dataclass(frozen=True, slots=True)
class InsertionPoint:
    """A candidate slot on the timeline.

    `index` is the insertion index into the sorted timeline. `gap` is only
    set for "between" points and `relevance` only when a card is selected.
    """

    index: int
    position: PointPosition
    reference_card: Optional[Event]
    difficulty: PointDifficulty
    hint: str

    next_card: Optional[Event] = None
    gap: Optional[int] = None
    relevance: Optional[float] = None

    def with_relevance(self, relevance: float) -> "InsertionPoint":
        return replace(self, relevance=relevance)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "index": self.index,
            "position": self.position,
            "referenceCard": self.reference_card.to_dict() if self.reference_card else None,
            "difficulty": self.difficulty,
            "hint": self.hint,
        }
        if self.next_card is not None:
            out["nextCard"] = self.next_card.to_dict()
        if self.gap is not None:
            out["gap"] = self.gap
        if self.relevance is not None:
            out["relevance"] = self.relevance
        return out
