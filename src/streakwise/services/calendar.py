"""Calendar arithmetic and recurrence-pattern matching.

Weekdays use Sunday=0 … Saturday=6 numbering throughout, which is what the
stored ``target_days`` column holds. ``date.weekday()`` (Monday=0) is only
used inside :func:`weekday_index`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Iterator

from .errors import InvalidRange

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
ONE_DAY = timedelta(days=1)


class PatternKind(str, Enum):
    """Labeling classification of a recurrence pattern."""

    EVERY_DAY = "every_day"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    SINGLE_DAY = "single_day"
    CUSTOM = "custom"


def weekday_index(day: date) -> int:
    """Return the Sunday=0 weekday number of ``day``."""

    return (day.weekday() + 1) % 7


@dataclass(frozen=True, slots=True)
class RecurrencePattern:
    """Non-empty, immutable set of target weekdays."""

    days: frozenset[int]

    def __post_init__(self) -> None:
        values = list(self.days)
        if not values:
            raise ValueError("Recurrence pattern needs at least one weekday")
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
                raise ValueError(f"Weekday must be an integer in 0..6, got {value!r}")
        object.__setattr__(self, "days", frozenset(values))

    @classmethod
    def of(cls, values: Iterable[int]) -> "RecurrencePattern":
        """Build a pattern from any iterable of weekday numbers."""
        return cls(tuple(values))  # type: ignore[arg-type]

    @classmethod
    def every_day(cls) -> "RecurrencePattern":
        return cls(frozenset(range(7)))

    @classmethod
    def weekdays(cls) -> "RecurrencePattern":
        return cls(frozenset({1, 2, 3, 4, 5}))

    @classmethod
    def weekends(cls) -> "RecurrencePattern":
        return cls(frozenset({0, 6}))

    @property
    def kind(self) -> PatternKind:
        if len(self.days) == 7:
            return PatternKind.EVERY_DAY
        if self.days == {1, 2, 3, 4, 5}:
            return PatternKind.WEEKDAYS
        if self.days == {0, 6}:
            return PatternKind.WEEKENDS
        if len(self.days) == 1:
            return PatternKind.SINGLE_DAY
        return PatternKind.CUSTOM

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``"Weekdays"`` or ``"Every Tuesday"``."""
        kind = self.kind
        if kind is PatternKind.EVERY_DAY:
            return "Every day"
        if kind is PatternKind.WEEKDAYS:
            return "Weekdays"
        if kind is PatternKind.WEEKENDS:
            return "Weekends"
        if kind is PatternKind.SINGLE_DAY:
            (only,) = self.days
            return f"Every {DAY_NAMES[only]}"
        return "Custom"

    def matches(self, day: date) -> bool:
        return weekday_index(day) in self.days

    def as_list(self) -> list[int]:
        """Sorted weekday numbers, the shape stored in the database."""
        return sorted(self.days)


def is_target_day(day: date, pattern: RecurrencePattern) -> bool:
    """Return True when ``day`` falls on one of the pattern's weekdays."""

    return pattern.matches(day)


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive calendar-day range ``[start, end]``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidRange(self.start, self.end)

    @property
    def length(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[date]:
        cursor = self.start
        while cursor <= self.end:
            yield cursor
            cursor += ONE_DAY

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def intersect(self, other: "DateWindow") -> "DateWindow | None":
        """Overlap of two windows, or None when they are disjoint."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if end < start:
            return None
        return DateWindow(start, end)


class TargetDays:
    """Restartable ascending sequence of target days inside a range.

    Each call to ``iter()`` starts a fresh walk, so the same object can be
    consumed more than once.
    """

    __slots__ = ("start", "end", "pattern")

    def __init__(self, start: date, end: date, pattern: RecurrencePattern):
        if end < start:
            raise InvalidRange(start, end)
        self.start = start
        self.end = end
        self.pattern = pattern

    def __iter__(self) -> Iterator[date]:
        cursor = self.start
        while cursor <= self.end:
            if self.pattern.matches(cursor):
                yield cursor
            cursor += ONE_DAY

    def __repr__(self) -> str:
        return f"TargetDays({self.start.isoformat()}..{self.end.isoformat()}, {self.pattern.label!r})"


def target_days(start: date, end: date, pattern: RecurrencePattern) -> TargetDays:
    """Return the target days of ``pattern`` within ``[start, end]``.

    Raises:
        InvalidRange: if ``start`` is after ``end``.
    """

    return TargetDays(start, end, pattern)


def count_target_days(start: date, end: date, pattern: RecurrencePattern) -> int:
    """Count target days within ``[start, end]`` without walking every day."""

    if end < start:
        raise InvalidRange(start, end)
    total_days = (end - start).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * len(pattern.days)
    first = weekday_index(start)
    for offset in range(remainder):
        if (first + offset) % 7 in pattern.days:
            count += 1
    return count


__all__ = [
    "DAY_NAMES",
    "DateWindow",
    "PatternKind",
    "RecurrencePattern",
    "TargetDays",
    "count_target_days",
    "is_target_day",
    "target_days",
    "weekday_index",
]
