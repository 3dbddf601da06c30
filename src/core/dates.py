from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Union

from core.errors import InvalidDateError

"""
Date utilities used across the project.

Event dates arrive as ISO strings from the REST back end ("1989-11-09" or
"1989-11-09T00:00:00.000Z"). Everything is normalized to timezone-aware
UTC datetimes so comparisons never mix naive and aware values.
"""

DateLike = Union[str, date, datetime]


def parse_date(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise InvalidDateError("Event date is empty")
        # fromisoformat on older interpreters rejects a trailing "Z"
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError as e:
            raise InvalidDateError(f"Invalid event date: {value!r}") from e
    else:
        raise InvalidDateError(f"Invalid event date: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def year_of(value: DateLike) -> int:
    return parse_date(value).year


def decade_of(value: DateLike) -> int:
    return (year_of(value) // 10) * 10
