"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_active(self, *, user_id: int) -> list[Habit]:
        """List only active habits, ordered by id."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .where(Habit.is_active == True)  # noqa: E712
                .order_by(Habit.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def get_completions(
        self, habit_id: int, start_date: date, end_date: date, *, user_id: int
    ) -> list[HabitCompletion]:
        """Get completions for a habit within a date range."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.day >= start_date)
                .where(HabitCompletion.day <= end_date)
                .order_by(HabitCompletion.day)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def all_completions(self, habit_id: int, *, user_id: int) -> list[HabitCompletion]:
        """Get every completion logged for a habit."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .order_by(HabitCompletion.day)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def record_completion(self, completion: HabitCompletion, *, user_id: int) -> HabitCompletion:
        """Insert or update the completion for a habit and day."""
        with self.session_factory() as session:
            completion.user_id = user_id
            existing = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == completion.habit_id)
                .where(HabitCompletion.day == completion.day)
            ).first()

            if existing:
                existing.completed = completion.completed
                existing.completed_at = completion.completed_at
                session.add(existing)
                session.commit()
                session.refresh(existing)
                session.expunge(existing)
                return existing

            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def update_streaks(
        self, habit_id: int, current_streak: int, longest_streak: int, *, user_id: int
    ) -> None:
        """Persist the cached streak columns."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                raise LookupError(f"Habit {habit_id} not found for user {user_id}")
            habit.current_streak = current_streak
            habit.longest_streak = longest_streak
            session.add(habit)
            session.commit()
        logger.info(
            "Updated cached streaks",
            extra={"habit_id": habit_id, "current_streak": current_streak, "longest_streak": longest_streak},
        )
