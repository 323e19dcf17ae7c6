"""Habit services bridging the repository and the analytics engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from ..models.habit import HabitCompletion
from .aggregation import HabitRate, HeatmapCell, TrendPoint, combined_trend, completion_heatmap
from .analytics import AnalyticsResult, compute_analytics, compute_rankings
from .calendar import DateWindow
from .definitions import HabitHistory
from .windows import to_local_date

logger = get_logger(__name__)


class HabitNotFound(LookupError):
    """No habit with the given id belongs to the user."""

    def __init__(self, habit_id: int, user_id: int):
        self.habit_id = habit_id
        self.user_id = user_id
        super().__init__(f"Habit {habit_id} not found for user {user_id}")


@dataclass(slots=True)
class UserAnalytics:
    """Cross-habit view for one user over one window."""

    window: DateWindow
    rates: list[HabitRate]
    trend: list[TrendPoint]


def load_history(
    repository: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    window: DateWindow | None = None,
) -> HabitHistory:
    """Read a habit and its completion log as engine inputs.

    With a ``window`` only completions inside it are read, which is all the
    rate, trend and heatmap views look at. Streaks need the full log.
    """

    habit = repository.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        raise HabitNotFound(habit_id, user_id)
    if window is None:
        rows = repository.all_completions(habit_id, user_id=user_id)
    else:
        rows = repository.get_completions(habit_id, window.start, window.end, user_id=user_id)
    records = tuple(c.to_record() for c in rows)
    return HabitHistory(habit=habit.to_definition(), records=records)


def habit_analytics(
    repository: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    today: date,
    window: DateWindow | None = None,
    bucket_days: int = 1,
    trend_days: int = 7,
) -> AnalyticsResult:
    history = load_history(repository, habit_id, user_id=user_id)
    return compute_analytics(
        history.habit,
        history.records,
        today,
        window,
        bucket_days=bucket_days,
        trend_days=trend_days,
    )


def refresh_streaks(
    repository: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    today: date,
) -> AnalyticsResult:
    """Recompute streaks from the full history and write them to the habit row.

    The stored columns are overwritten rather than incremented, so calling
    this repeatedly is safe.
    """

    result = habit_analytics(repository, habit_id, user_id=user_id, today=today)
    repository.update_streaks(
        habit_id,
        result.current_streak,
        result.longest_streak,
        user_id=user_id,
    )
    return result


def _active_histories(
    repository: HabitRepository, *, user_id: int, window: DateWindow
) -> list[HabitHistory]:
    return [
        load_history(repository, habit.id, user_id=user_id, window=window)
        for habit in repository.list_active(user_id=user_id)
        if habit.id is not None
    ]


def user_analytics(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date,
    window: DateWindow,
) -> UserAnalytics:
    """Completion rate by habit plus the combined daily trend for a user."""

    histories = _active_histories(repository, user_id=user_id, window=window)
    logger.debug("Aggregating %d habits for user %s", len(histories), user_id)
    return UserAnalytics(
        window=window,
        rates=compute_rankings(histories, today, window),
        trend=combined_trend(histories, today=today, window=window),
    )


def habit_heatmap(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date,
    window: DateWindow,
) -> list[HeatmapCell]:
    """Completed and due counts per day across a user's active habits."""

    histories = _active_histories(repository, user_id=user_id, window=window)
    return completion_heatmap(histories, today=today, window=window)


def log_completion(
    repository: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    at: datetime,
    zone: tzinfo,
    completed: bool = True,
) -> HabitCompletion:
    """Record an outcome for the calendar day ``at`` falls on in ``zone``.

    Logging the same day again replaces the earlier outcome.
    """

    if repository.get_by_id(habit_id, user_id=user_id) is None:
        raise HabitNotFound(habit_id, user_id)
    day = to_local_date(at, zone)
    row = repository.record_completion(
        HabitCompletion(habit_id=habit_id, day=day, completed=completed, completed_at=at, user_id=user_id),
        user_id=user_id,
    )
    logger.debug("Logged completion", extra={"habit_id": habit_id, "day": day.isoformat(), "completed": completed})
    return row


__all__ = [
    "HabitNotFound",
    "UserAnalytics",
    "habit_analytics",
    "habit_heatmap",
    "load_history",
    "log_completion",
    "refresh_streaks",
    "user_analytics",
]
