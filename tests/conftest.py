"""Pytest configuration and shared fixtures for Streakwise tests.

Database fixtures give every test an isolated SQLite file; the factories
build habits and completion logs without touching any real data directory.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from streakwise.infra.database import create_session_factory
from streakwise.models import Habit, HabitCompletion

from factories import MONDAY, USER_ID


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep config from reading the developer's environment or writing to ./instance."""

    monkeypatch.setenv("STREAKWISE_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "STREAKWISE_DATABASE_URL",
        "STREAKWISE_DEV_MODE",
        "STREAKWISE_TIMEZONE",
        "STREAKWISE_TREND_DAYS",
        "STREAKWISE_TIME_RANGE",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for arranging test data directly."""

    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories receive in the app."""

    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for persisted Habit rows."""

    def _create_habit(
        name: str = "Exercise",
        target_days: list[int] | None = None,
        start_date: date = MONDAY,
        user_id: int = USER_ID,
        is_active: bool = True,
    ) -> Habit:
        habit = Habit(
            user_id=user_id,
            name=name,
            target_days=target_days if target_days is not None else list(range(7)),
            start_date=start_date,
            is_active=is_active,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def completion_factory(db_session):
    """Factory for persisted HabitCompletion rows."""

    def _create_completion(habit: Habit, day: date, completed: bool = True) -> HabitCompletion:
        row = HabitCompletion(
            user_id=habit.user_id,
            habit_id=habit.id,
            day=day,
            completed=completed,
            completed_at=datetime(day.year, day.month, day.day, 20, 0, tzinfo=timezone.utc),
        )
        db_session.add(row)
        db_session.commit()
        return row

    return _create_completion
