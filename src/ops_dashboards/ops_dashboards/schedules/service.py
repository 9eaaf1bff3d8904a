from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import as_date, now_local
from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period, ScheduleKind
from ..core.exceptions import NotFoundError
from ..filters.builder import FieldMap, build_predicate
from ..filters.model import FilterCriteria
from ..filters.periods import resolve_period
from .model import ScheduleRecord
from .repository import ScheduleRepository

# Schedules span a date range, so every period is matched by overlap.
SCHEDULE_FIELDS = FieldMap(
    fields={
        "store": "store_name",
        "date": ("from_date", "to_date"),
    },
    default_period=Period.ALL,
)


class ScheduleDashboardService:
    """Read-only review of submitted security or third-party schedules."""

    def __init__(self, kind: ScheduleKind, schedules: ScheduleRepository, *, week_start: int = DEFAULT_WEEK_START):
        self._kind = kind
        self._schedules = schedules
        self._week_start = int(week_start)

    def _summary(self, now: datetime) -> dict:
        return self._schedules.count_summary(
            today=as_date(now),
            month=resolve_period(Period.THIS_MONTH, now=now),
            week=resolve_period(Period.THIS_WEEK, now=now, week_start=self._week_start),
        )

    def build_dashboard(self, criteria: FilterCriteria, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        predicate = build_predicate(criteria, SCHEDULE_FIELDS, now=now, week_start=self._week_start)
        schedules = self._schedules.list_filtered(predicate)
        return {
            "schedules": [s.to_dict() for s in schedules],
            "stats": self._summary(now),
            "stores": list(self._schedules.list_stores()),
            "filters": {
                "store": criteria.store,
                "period": criteria.period or Period.ALL.value,
                "fromDate": criteria.from_date,
                "toDate": criteria.to_date,
            },
        }

    def landing_stats(self, *, now: Optional[datetime] = None) -> dict:
        summary = self._summary(now or now_local())
        return {k: summary[k] for k in ("Total", "Active", "ThisMonth")}

    def get_schedule(self, schedule_id: int) -> ScheduleRecord:
        schedule = self._schedules.get_schedule(schedule_id=int(schedule_id))
        if not schedule:
            raise NotFoundError(f"{self._kind.value.capitalize()} schedule not found")
        return schedule
