"""Streak calculator tests.

Covers consecutive runs, explicit and implicit misses, the pending-today
rule, non-daily recurrence patterns and records outside the habit's range.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from streakwise.services.calendar import RecurrencePattern
from streakwise.services.definitions import CompletionRecord
from streakwise.services.errors import InvalidRange
from streakwise.services.ledger import CompletionLedgerView
from streakwise.services.streaks import StreakSummary, compute_streaks

from factories import MONDAY, make_records


def _streaks(records, today, pattern=None, start_date=MONDAY) -> StreakSummary:
    pattern = pattern or RecurrencePattern.every_day()
    ledger = CompletionLedgerView.build(records, start_date=start_date, today=today)
    return compute_streaks(ledger, pattern, start_date=start_date, today=today)


def _days(start: date, count: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(count)]


class TestCurrentStreak:
    """Tests for the run that is still alive as of today."""

    def test_no_records_returns_zero(self):
        assert _streaks([], MONDAY + timedelta(days=5)) == StreakSummary(0, 0)

    def test_full_daily_history_counts_every_day(self):
        today = MONDAY + timedelta(days=29)
        result = _streaks(make_records(_days(MONDAY, 30)), today)
        assert result.current == result.longest == 30

    def test_today_pending_keeps_streak(self):
        """No record for today must not zero out the prior six days."""
        today = MONDAY + timedelta(days=6)
        result = _streaks(make_records(_days(MONDAY, 6)), today)
        assert result.current == 6

    def test_explicit_miss_today_resets(self):
        today = MONDAY + timedelta(days=6)
        records = make_records(_days(MONDAY, 6)) + [CompletionRecord(habit_id=1, day=today, completed=False)]
        result = _streaks(records, today)
        assert result.current == 0
        assert result.longest == 6

    def test_completed_today_extends_streak(self):
        today = MONDAY + timedelta(days=6)
        result = _streaks(make_records(_days(MONDAY, 7)), today)
        assert result.current == 7

    def test_missing_yesterday_breaks_streak(self):
        today = MONDAY + timedelta(days=6)
        result = _streaks(make_records(_days(MONDAY, 5)), today)
        assert result.current == 0
        assert result.longest == 5

    def test_start_equals_today_pending(self):
        assert _streaks([], MONDAY, start_date=MONDAY) == StreakSummary(0, 0)


class TestLongestStreak:
    """Tests for the historical maximum run."""

    def test_longest_survives_later_break(self):
        """5 completed, 1 missed, 2 completed: longest 5, current 2."""
        days = _days(MONDAY, 8)
        records = make_records(days[:5]) + [
            CompletionRecord(habit_id=1, day=days[5], completed=False)
        ] + make_records(days[6:])
        result = _streaks(records, days[7])
        assert result.longest == 5
        assert result.current == 2

    def test_current_run_can_be_longest(self):
        days = _days(MONDAY, 12)
        records = make_records(days[:2]) + make_records(days[3:])
        result = _streaks(records, days[-1])
        assert result.current == result.longest == 9

    def test_multiple_runs_returns_maximum(self):
        days = _days(MONDAY, 20)
        completed = days[0:3] + days[4:11] + days[12:16]
        result = _streaks(make_records(completed), days[-1])
        assert result.longest == 7
        assert result.current == 0


class TestRecurrencePatterns:
    """Non-target days never count as misses."""

    def test_weekday_scenario_with_unlogged_thursday_friday(self):
        """Mon-Wed done, Thu/Fri unlogged, today is next Monday with nothing yet."""
        today = MONDAY + timedelta(days=7)
        result = _streaks(make_records(_days(MONDAY, 3)), today, RecurrencePattern.weekdays())
        assert result.current == 0
        assert result.longest == 3

    def test_weekend_gap_does_not_break_weekday_streak(self):
        weekdays = [d for d in _days(MONDAY, 12) if d.weekday() < 5]
        today = MONDAY + timedelta(days=11)  # Friday of week two
        result = _streaks(make_records(weekdays), today, RecurrencePattern.weekdays())
        assert result.current == result.longest == 10

    def test_non_target_records_are_ignored(self):
        # Saturday completion on a weekday habit adds nothing.
        days = _days(MONDAY, 6)
        result = _streaks(make_records(days), MONDAY + timedelta(days=5), RecurrencePattern.weekdays())
        assert result.current == result.longest == 5

    def test_single_day_pattern_across_weeks(self):
        mondays = [MONDAY + timedelta(weeks=w) for w in range(4)]
        today = mondays[-1] + timedelta(days=3)
        result = _streaks(make_records(mondays), today, RecurrencePattern.of([1]))
        assert result.current == result.longest == 4

    def test_single_day_pattern_pending_today(self):
        mondays = [MONDAY + timedelta(weeks=w) for w in range(3)]
        today = MONDAY + timedelta(weeks=3)
        result = _streaks(make_records(mondays), today, RecurrencePattern.of([1]))
        assert result.current == 3

    def test_no_target_days_in_range(self):
        # Monday start, weekend habit, evaluated on Wednesday.
        result = _streaks([], MONDAY + timedelta(days=2), RecurrencePattern.weekends())
        assert result == StreakSummary(0, 0)


class TestRange:
    def test_records_before_start_are_ignored(self):
        start = MONDAY + timedelta(days=3)
        records = make_records(_days(MONDAY, 6))
        result = _streaks(records, MONDAY + timedelta(days=5), start_date=start)
        assert result.current == result.longest == 3

    def test_today_before_start_raises(self):
        with pytest.raises(InvalidRange):
            _streaks([], MONDAY - timedelta(days=1), start_date=MONDAY)

    def test_recompute_is_stable(self):
        records = make_records(_days(MONDAY, 4))
        today = MONDAY + timedelta(days=4)
        assert _streaks(records, today) == _streaks(list(reversed(records)), today)
