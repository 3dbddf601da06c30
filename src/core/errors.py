from __future__ import annotations


class TimelineError(Exception):
    """Base error for the timeline server."""


class ValidationError(TimelineError):
    """Raised when user input is invalid."""


class InvalidDateError(ValidationError):
    """Raised when an event date cannot be parsed."""


class InvalidLeaderboardTypeError(ValidationError):
    """Raised when a leaderboard type has no registered cache prefix."""


class ExternalServiceError(TimelineError):
    """Raised when the timeline REST back end fails."""


class NotFoundError(TimelineError):
    """Raised when a requested resource is not found."""
