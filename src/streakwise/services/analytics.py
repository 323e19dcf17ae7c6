"""Single entry point for per-habit streak and rate analytics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from ..logging_config import get_logger
from .aggregation import HabitRate, TrendPoint, completion_rate, rank_completion_rates, trend_series
from .calendar import DateWindow
from .definitions import CompletionRecord, HabitDefinition, HabitHistory
from .errors import InvalidRange
from .ledger import CompletionLedgerView
from .streaks import compute_streaks
from .windows import since_start, trailing_window

logger = get_logger(__name__)

DEFAULT_TREND_DAYS = 7


@dataclass(frozen=True, slots=True)
class AnalyticsResult:
    """Everything derived for one habit as of one reference day."""

    habit_id: int
    today: date
    current_streak: int
    longest_streak: int
    completion_rate: int
    trend_series: tuple[TrendPoint, ...]
    rate_window: DateWindow
    trend_window: DateWindow

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation with ISO dates."""
        return {
            "habitId": self.habit_id,
            "today": self.today.isoformat(),
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "completionRate": self.completion_rate,
            "rateWindow": {"from": self.rate_window.start.isoformat(), "to": self.rate_window.end.isoformat()},
            "trendWindow": {"from": self.trend_window.start.isoformat(), "to": self.trend_window.end.isoformat()},
            "trendSeries": [
                {"date": point.day.isoformat(), "completionRate": point.completion_rate}
                for point in self.trend_series
            ],
        }


def compute_analytics(
    habit: HabitDefinition,
    records: Iterable[CompletionRecord],
    today: date,
    window: DateWindow | None = None,
    *,
    bucket_days: int = 1,
    trend_days: int = DEFAULT_TREND_DAYS,
) -> AnalyticsResult:
    """Derive streaks, completion rate and trend for ``habit`` as of ``today``.

    Without ``window`` the rate covers the whole history since the start date
    and the trend covers the last ``trend_days`` days. With ``window`` both
    use it.

    Raises:
        InvalidRange: if ``today`` is before the habit's start date.
    """

    if today < habit.start_date:
        raise InvalidRange(
            habit.start_date,
            today,
            f"today {today.isoformat()} is before habit {habit.habit_id} start {habit.start_date.isoformat()}",
        )

    rate_window = window or since_start(habit.start_date, today)
    trend_window = window or trailing_window(today, trend_days)

    ledger = CompletionLedgerView.build(
        records,
        start_date=habit.start_date,
        today=today,
        habit_id=habit.habit_id,
    )
    streaks = compute_streaks(ledger, habit.pattern, start_date=habit.start_date, today=today)
    rate = completion_rate(
        ledger,
        habit.pattern,
        start_date=habit.start_date,
        today=today,
        window=rate_window,
    )
    series = trend_series(
        ledger,
        habit.pattern,
        start_date=habit.start_date,
        today=today,
        window=trend_window,
        bucket_days=bucket_days,
    )

    logger.debug(
        "Computed analytics for habit %s: current=%d longest=%d rate=%d",
        habit.habit_id,
        streaks.current,
        streaks.longest,
        rate,
    )

    return AnalyticsResult(
        habit_id=habit.habit_id,
        today=today,
        current_streak=streaks.current,
        longest_streak=streaks.longest,
        completion_rate=rate,
        trend_series=tuple(series),
        rate_window=rate_window,
        trend_window=trend_window,
    )


def compute_rankings(
    histories: Iterable[HabitHistory],
    today: date,
    window: DateWindow,
) -> list[HabitRate]:
    """Completion rate by habit over one shared window, best first."""

    return rank_completion_rates(histories, today=today, window=window)


__all__ = ["AnalyticsResult", "DEFAULT_TREND_DAYS", "compute_analytics", "compute_rankings"]
