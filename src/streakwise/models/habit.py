"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from ..services.calendar import RecurrencePattern
from ..services.definitions import CompletionRecord, HabitDefinition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined habit scheduled on a set of weekdays."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: str = Field(default="", max_length=255)
    # Sunday=0 … Saturday=6
    target_days: list[int] = Field(
        default_factory=lambda: list(range(7)),
        sa_column=Column(JSON, nullable=False),
    )
    start_date: date = Field(nullable=False)
    # Cache of the analytics engine output; written by services.habits.refresh_streaks.
    current_streak: int = Field(default=0, nullable=False)
    longest_streak: int = Field(default=0, nullable=False)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    def to_definition(self) -> HabitDefinition:
        if self.id is None:
            raise ValueError("Habit must be persisted before it can be analysed")
        return HabitDefinition(
            habit_id=self.id,
            name=self.name,
            pattern=RecurrencePattern.of(self.target_days),
            start_date=self.start_date,
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
        )


class HabitCompletion(SQLModel, table=True):
    """Completion outcome for a habit on a calendar day; one row per (habit, day)."""

    __tablename__: ClassVar[str] = "habit_completion"

    user_id: int = Field(nullable=False, index=True)
    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    day: date = Field(primary_key=True, index=True)
    completed: bool = Field(default=True, nullable=False)
    completed_at: datetime = Field(default_factory=_utcnow, nullable=False)

    def to_record(self) -> CompletionRecord:
        return CompletionRecord(
            habit_id=self.habit_id,
            day=self.day,
            completed=self.completed,
            recorded_at=self.completed_at,
        )
