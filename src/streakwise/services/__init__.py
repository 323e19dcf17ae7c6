"""Service module exports.

``habits`` is not imported here because it depends on the SQLModel tables,
which themselves import the calendar module from this package.
"""

from . import aggregation, analytics, calendar, definitions, errors, ledger, streaks, windows
from .analytics import AnalyticsResult, compute_analytics, compute_rankings
from .calendar import DateWindow, RecurrencePattern
from .definitions import CompletionRecord, HabitDefinition, HabitHistory
from .errors import AnalyticsError, InvalidRange, MissingRecord

__all__ = [
    "AnalyticsError",
    "AnalyticsResult",
    "CompletionRecord",
    "DateWindow",
    "HabitDefinition",
    "HabitHistory",
    "InvalidRange",
    "MissingRecord",
    "RecurrencePattern",
    "aggregation",
    "analytics",
    "calendar",
    "compute_analytics",
    "compute_rankings",
    "definitions",
    "errors",
    "ledger",
    "streaks",
    "windows",
]
