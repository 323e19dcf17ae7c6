"""Current and longest streak calculation for a single habit."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .calendar import RecurrencePattern, target_days
from .errors import InvalidRange
from .ledger import CompletionLedgerView, CompletionStatus


@dataclass(frozen=True, slots=True)
class StreakSummary:
    """Result of a streak walk."""

    current: int
    longest: int


def compute_streaks(
    ledger: CompletionLedgerView,
    pattern: RecurrencePattern,
    *,
    start_date: date,
    today: date,
) -> StreakSummary:
    """Walk target days from ``start_date`` to ``today`` and return the streaks.

    A target day counts toward the run when completed. An explicit miss, or a
    past target day with nothing logged, resets the run to zero. Today with
    nothing logged is pending: the run carried in from earlier days is
    reported as the current streak.

    Raises:
        InvalidRange: if ``today`` is before ``start_date``.
    """

    if today < start_date:
        raise InvalidRange(start_date, today, f"today {today.isoformat()} is before habit start {start_date.isoformat()}")

    run = 0
    longest = 0
    for day in target_days(start_date, today, pattern):
        status = ledger.status_on(day)
        if status is CompletionStatus.COMPLETED:
            run += 1
            if run > longest:
                longest = run
        elif status is CompletionStatus.NO_RECORD and day == today:
            # Pending: today is the last day in range.
            break
        else:
            run = 0

    return StreakSummary(current=run, longest=longest)


__all__ = ["StreakSummary", "compute_streaks"]
