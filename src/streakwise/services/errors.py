"""Error kinds raised by the analytics engine.

Every error here is a caller input-validation failure; the engine does no
I/O, so nothing is retried and nothing is fatal.
"""

from __future__ import annotations

from datetime import date


class AnalyticsError(ValueError):
    """Base class for analytics input errors."""


class InvalidRange(AnalyticsError):
    """A date range whose end precedes its start."""

    def __init__(self, start: date, end: date, message: str | None = None):
        self.start = start
        self.end = end
        super().__init__(message or f"Invalid range: {end.isoformat()} is before {start.isoformat()}")


class MissingRecord(AnalyticsError, LookupError):
    """``is_completed`` was asked about a day that has no record."""

    def __init__(self, day: date):
        self.day = day
        super().__init__(f"No completion record for {day.isoformat()}")


__all__ = ["AnalyticsError", "InvalidRange", "MissingRecord"]
