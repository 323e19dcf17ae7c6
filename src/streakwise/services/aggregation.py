"""Completion-rate and trend aggregation over date windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .calendar import DateWindow, RecurrencePattern, target_days
from .definitions import HabitHistory
from .ledger import CompletionLedgerView, CompletionStatus


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """One chart bucket, labelled by its first day."""

    day: date
    completion_rate: int


@dataclass(frozen=True, slots=True)
class HabitRate:
    habit_id: int
    habit_name: str
    completion_rate: int


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    """Cross-habit activity for one calendar day."""

    day: date
    completed_count: int
    due_count: int
    rate: int


def percentage(completed: int, total: int) -> int:
    """Return ``100 * completed / total`` rounded half-up; 0 when ``total`` is 0."""

    if total <= 0:
        return 0
    value = Decimal(100 * completed) / Decimal(total)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _elapsed_span(window: DateWindow, *, start_date: date, today: date) -> DateWindow | None:
    """Portion of ``window`` on or after ``start_date`` and on or before ``today``."""

    if today < start_date:
        return None
    return window.intersect(DateWindow(start_date, today))


def _tally(ledger: CompletionLedgerView, pattern: RecurrencePattern, span: DateWindow | None) -> tuple[int, int]:
    if span is None:
        return 0, 0
    completed = 0
    total = 0
    for day in target_days(span.start, span.end, pattern):
        total += 1
        if ledger.status_on(day) is CompletionStatus.COMPLETED:
            completed += 1
    return completed, total


def completion_rate(
    ledger: CompletionLedgerView,
    pattern: RecurrencePattern,
    *,
    start_date: date,
    today: date,
    window: DateWindow,
) -> int:
    """Share of elapsed target days in ``window`` that were completed, 0-100.

    Today counts as due. A window with no target days rates 0.
    """

    span = _elapsed_span(window, start_date=start_date, today=today)
    completed, total = _tally(ledger, pattern, span)
    return percentage(completed, total)


def _buckets(window: DateWindow, bucket_days: int) -> list[DateWindow]:
    if bucket_days < 1:
        raise ValueError(f"bucket_days must be at least 1, got {bucket_days}")
    buckets = []
    cursor = window.start
    step = timedelta(days=bucket_days)
    while cursor <= window.end:
        end = min(cursor + step - timedelta(days=1), window.end)
        buckets.append(DateWindow(cursor, end))
        cursor = end + timedelta(days=1)
    return buckets


def trend_series(
    ledger: CompletionLedgerView,
    pattern: RecurrencePattern,
    *,
    start_date: date,
    today: date,
    window: DateWindow,
    bucket_days: int = 1,
) -> list[TrendPoint]:
    """Return one point per bucket covering ``window`` in ascending order.

    Buckets are ``bucket_days`` long; the last one is cut short at the end of
    the window. Buckets without due target days report 0, so the series never
    has gaps.
    """

    series = []
    for bucket in _buckets(window, bucket_days):
        span = _elapsed_span(bucket, start_date=start_date, today=today)
        completed, total = _tally(ledger, pattern, span)
        series.append(TrendPoint(day=bucket.start, completion_rate=percentage(completed, total)))
    return series


def ledger_for(history: HabitHistory, *, today: date) -> CompletionLedgerView:
    habit = history.habit
    return CompletionLedgerView.build(
        history.records,
        start_date=habit.start_date,
        today=today,
        habit_id=habit.habit_id,
    )


def rank_completion_rates(
    histories: Iterable[HabitHistory],
    *,
    today: date,
    window: DateWindow,
) -> list[HabitRate]:
    """Completion rate per habit over the same window, highest first.

    Ties keep habit id order.
    """

    rates = []
    for history in histories:
        habit = history.habit
        rate = completion_rate(
            ledger_for(history, today=today),
            habit.pattern,
            start_date=habit.start_date,
            today=today,
            window=window,
        )
        rates.append(HabitRate(habit_id=habit.habit_id, habit_name=habit.name, completion_rate=rate))
    rates.sort(key=lambda item: (-item.completion_rate, item.habit_id))
    return rates


def _daily_tallies(
    histories: Iterable[HabitHistory],
    *,
    today: date,
    window: DateWindow,
) -> list[tuple[date, int, int]]:
    """(day, completed, due) across habits for every day in ``window``."""

    prepared = [(history.habit, ledger_for(history, today=today)) for history in histories]
    rows = []
    for day in window.days():
        completed = 0
        due = 0
        if day <= today:
            for habit, ledger in prepared:
                if day < habit.start_date or not habit.pattern.matches(day):
                    continue
                due += 1
                if ledger.status_on(day) is CompletionStatus.COMPLETED:
                    completed += 1
        rows.append((day, completed, due))
    return rows


def combined_trend(
    histories: Iterable[HabitHistory],
    *,
    today: date,
    window: DateWindow,
) -> list[TrendPoint]:
    """Per-day completion rate across all habits due that day."""

    return [
        TrendPoint(day=day, completion_rate=percentage(completed, due))
        for day, completed, due in _daily_tallies(histories, today=today, window=window)
    ]


def completion_heatmap(
    histories: Iterable[HabitHistory],
    *,
    today: date,
    window: DateWindow,
) -> list[HeatmapCell]:
    """One cell per day in ``window`` with completed and due habit counts."""

    return [
        HeatmapCell(day=day, completed_count=completed, due_count=due, rate=percentage(completed, due))
        for day, completed, due in _daily_tallies(histories, today=today, window=window)
    ]


__all__ = [
    "HabitRate",
    "HeatmapCell",
    "TrendPoint",
    "combined_trend",
    "completion_heatmap",
    "completion_rate",
    "ledger_for",
    "percentage",
    "rank_completion_rates",
    "trend_series",
]
