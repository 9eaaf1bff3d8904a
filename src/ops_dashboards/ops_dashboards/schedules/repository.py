from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..filters.model import DateRange, Predicate
from .model import ScheduleRecord


class ScheduleRepository(Protocol):
    def list_filtered(self, predicate: Predicate) -> Sequence[ScheduleRecord]:
        """Headers with employee counts, newest first."""

        raise NotImplementedError

    def get_schedule(self, *, schedule_id: int) -> Optional[ScheduleRecord]:
        """Header plus employee rows in insertion order."""

        raise NotImplementedError

    def list_stores(self) -> Sequence[str]:
        raise NotImplementedError

    def count_summary(self, *, today: date, month: DateRange, week: DateRange) -> dict:
        """Total, Active (covering `today`), ThisMonth and ThisWeek (by start date)."""

        raise NotImplementedError
