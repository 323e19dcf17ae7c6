"""Date-indexed, read-only projection of one habit's completion records."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from ..logging_config import get_logger
from .definitions import CompletionRecord
from .errors import MissingRecord

logger = get_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CompletionStatus(str, Enum):
    """Three-valued outcome of a day: done, explicitly missed, or nothing logged."""

    COMPLETED = "completed"
    MISSED = "missed"
    NO_RECORD = "no_record"


def _recorded_key(record: CompletionRecord) -> datetime:
    """Sort key for duplicate resolution; naive timestamps are taken as UTC."""

    moment = record.recorded_at
    if moment is None:
        return _EPOCH
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class CompletionLedgerView:
    """Mapping of day -> completed flag restricted to ``[start_date, today]``.

    Build instances with :meth:`build`. A day missing from the view means
    nothing was logged, which is different from an explicit ``False``.
    """

    __slots__ = ("_entries", "start_date", "today")

    def __init__(self, entries: Mapping[date, bool], *, start_date: date, today: date):
        self._entries = MappingProxyType(dict(entries))
        self.start_date = start_date
        self.today = today

    @classmethod
    def build(
        cls,
        records: Iterable[CompletionRecord],
        *,
        start_date: date,
        today: date,
        habit_id: int | None = None,
    ) -> "CompletionLedgerView":
        """Project raw records into a view.

        Records outside ``[start_date, today]`` are dropped. When two records
        share a day the one with the latest ``recorded_at`` wins; on a tie the
        one appearing later in ``records`` wins.
        """

        chosen: dict[date, CompletionRecord] = {}
        dropped = 0
        foreign = 0
        for record in records:
            if habit_id is not None and record.habit_id != habit_id:
                foreign += 1
                continue
            if record.day < start_date or record.day > today:
                dropped += 1
                continue
            existing = chosen.get(record.day)
            if existing is None or _recorded_key(record) >= _recorded_key(existing):
                chosen[record.day] = record

        if foreign:
            logger.warning(
                "Ignored completion records for other habits",
                extra={"habit_id": habit_id, "ignored": foreign},
            )
        if dropped:
            logger.debug(
                "Dropped %d completion records outside %s..%s",
                dropped,
                start_date.isoformat(),
                today.isoformat(),
            )

        entries = {day: bool(record.completed) for day, record in chosen.items()}
        return cls(entries, start_date=start_date, today=today)

    def has_record(self, day: date) -> bool:
        return day in self._entries

    def is_completed(self, day: date) -> bool:
        """Return the logged flag for ``day``.

        Raises:
            MissingRecord: if nothing was logged for ``day``; check
                :meth:`has_record` first or use :meth:`status_on`.
        """
        try:
            return self._entries[day]
        except KeyError:
            raise MissingRecord(day) from None

    def status_on(self, day: date) -> CompletionStatus:
        flag = self._entries.get(day)
        if flag is None:
            return CompletionStatus.NO_RECORD
        return CompletionStatus.COMPLETED if flag else CompletionStatus.MISSED

    def completed_days(self) -> tuple[date, ...]:
        return tuple(sorted(day for day, flag in self._entries.items() if flag))

    def __contains__(self, day: object) -> bool:
        return day in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"CompletionLedgerView({len(self._entries)} entries, "
            f"{self.start_date.isoformat()}..{self.today.isoformat()})"
        )


__all__ = ["CompletionLedgerView", "CompletionStatus"]
