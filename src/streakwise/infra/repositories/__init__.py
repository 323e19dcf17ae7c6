"""SQLModel repository implementations."""

from .habit import SQLModelHabitRepository

__all__ = ["SQLModelHabitRepository"]
