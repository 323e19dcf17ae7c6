"""Plain value objects the analytics engine consumes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .calendar import RecurrencePattern


@dataclass(frozen=True, slots=True)
class HabitDefinition:
    """A habit as seen by the engine.

    ``current_streak`` and ``longest_streak`` mirror the cached columns and
    are never read by any calculation.
    """

    habit_id: int
    name: str
    pattern: RecurrencePattern
    start_date: date
    current_streak: int = 0
    longest_streak: int = 0


@dataclass(frozen=True, slots=True)
class CompletionRecord:
    """One logged outcome for a habit on a calendar day."""

    habit_id: int
    day: date
    completed: bool = True
    recorded_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class HabitHistory:
    """A habit together with the raw records the persistence layer returned for it."""

    habit: HabitDefinition
    records: tuple[CompletionRecord, ...] = ()


__all__ = ["CompletionRecord", "HabitDefinition", "HabitHistory"]
