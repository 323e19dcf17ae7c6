"""Reference-date and named analysis-window helpers."""

from __future__ import annotations

import calendar as _calendar
from datetime import date, datetime, timedelta, tzinfo

from .calendar import DateWindow

TIME_RANGES = ("week", "month", "year")
PERIODS = ("1week", "2weeks", "1month", "3months", "6months", "1year")


def today_in(zone: tzinfo, *, now: datetime | None = None) -> date:
    """Return the calendar day it currently is in ``zone``.

    ``now`` must be timezone aware when given; it exists so callers can pin
    the clock.
    """

    moment = now or datetime.now(zone)
    if moment.tzinfo is None:
        raise ValueError("now must be timezone aware")
    return moment.astimezone(zone).date()


def to_local_date(moment: datetime | date, zone: tzinfo) -> date:
    """Calendar day of ``moment`` as observed in ``zone``.

    Plain dates pass through untouched; naive datetimes are assumed to
    already be local to ``zone``.
    """

    if not isinstance(moment, datetime):
        return moment
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(zone).date()


def trailing_window(today: date, days: int) -> DateWindow:
    """The ``days`` calendar days ending on ``today``, inclusive."""

    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")
    return DateWindow(today - timedelta(days=days - 1), today)


def since_start(start_date: date, today: date) -> DateWindow:
    return DateWindow(start_date, today)


def _shift_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = _calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def resolve_time_range(name: str, today: date) -> DateWindow:
    """Calendar period containing ``today``.

    ``week`` runs Monday through Sunday; ``month`` and ``year`` are the
    calendar month and year. The window may extend past ``today``.
    """

    key = name.strip().lower()
    if key == "week":
        start = today - timedelta(days=today.weekday())
        return DateWindow(start, start + timedelta(days=6))
    if key == "month":
        last_day = _calendar.monthrange(today.year, today.month)[1]
        return DateWindow(today.replace(day=1), today.replace(day=last_day))
    if key == "year":
        return DateWindow(date(today.year, 1, 1), date(today.year, 12, 31))
    raise ValueError(f"Unknown time range {name!r}; expected one of {', '.join(TIME_RANGES)}")


def resolve_period(name: str, today: date) -> DateWindow:
    """Look-back window ending on ``today`` such as ``2weeks`` or ``6months``."""

    key = name.strip().lower()
    if key == "1week":
        return DateWindow(today - timedelta(days=7), today)
    if key == "2weeks":
        return DateWindow(today - timedelta(days=14), today)
    if key == "1month":
        return DateWindow(_shift_months(today, -1), today)
    if key == "3months":
        return DateWindow(_shift_months(today, -3), today)
    if key == "6months":
        return DateWindow(_shift_months(today, -6), today)
    if key == "1year":
        return DateWindow(_shift_months(today, -12), today)
    raise ValueError(f"Unknown period {name!r}; expected one of {', '.join(PERIODS)}")


__all__ = [
    "PERIODS",
    "TIME_RANGES",
    "resolve_period",
    "resolve_time_range",
    "since_start",
    "today_in",
    "to_local_date",
    "trailing_window",
]
