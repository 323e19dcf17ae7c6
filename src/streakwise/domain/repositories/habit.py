"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitCompletion


class HabitRepository(Protocol):
    """Persistence boundary the analytics services read from and write through."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_active(self, *, user_id: int) -> list[Habit]:
        """List only active habits."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def get_completions(
        self, habit_id: int, start_date: date, end_date: date, *, user_id: int
    ) -> list[HabitCompletion]:
        """Get completions for a habit within a date range."""
        ...

    def all_completions(self, habit_id: int, *, user_id: int) -> list[HabitCompletion]:
        """Get every completion logged for a habit."""
        ...

    def record_completion(self, completion: HabitCompletion, *, user_id: int) -> HabitCompletion:
        """Insert or update the completion for a habit and day."""
        ...

    def update_streaks(
        self, habit_id: int, current_streak: int, longest_streak: int, *, user_id: int
    ) -> None:
        """Persist the cached streak columns."""
        ...
