from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_WEEK_START, DISPLAY_ROW_LIMIT
from ..core.enums import Period
from ..filters.builder import FieldMap, build_predicate
from ..filters.model import FilterCriteria
from ..filters.periods import resolve_period
from .aggregation import aggregate, coerce_group_key
from .model import AggregationResult, AttendanceRecord
from .repository import AttendanceRepository

ATTENDANCE_FIELDS = FieldMap(
    fields={
        "store": "store_name",
        "company": "company",
        "worker_type": "worker_type",
        "name": "full_name",
        "date": "attendance_date",
    },
    default_period=Period.ALL,
)


@dataclass(frozen=True)
class AttendanceDashboard:
    result: AggregationResult
    records: Sequence[AttendanceRecord]
    truncated: bool
    criteria: FilterCriteria
    options: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["records"] = [r.to_dict() for r in self.records]
        data["truncated"] = self.truncated
        data["filters"] = {
            k: (v.strftime("%Y-%m-%d") if hasattr(v, "strftime") else v)
            for k, v in self.criteria.as_dict().items()
        }
        data["options"] = self.options
        return data


class AttendanceDashboardService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        week_start: int = DEFAULT_WEEK_START,
        row_limit: int = DISPLAY_ROW_LIMIT,
    ):
        self._attendance = attendance
        self._week_start = int(week_start)
        self._row_limit = int(row_limit)

    def build_dashboard(
        self,
        criteria: FilterCriteria,
        *,
        group_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceDashboard:
        now = now or now_local()
        predicate = build_predicate(criteria, ATTENDANCE_FIELDS, now=now, week_start=self._week_start)

        # Rows arrive filtered under the database collation; do not re-filter in Python.
        records = list(self._attendance.list_filtered(predicate))
        result = aggregate(records, (), coerce_group_key(group_by))

        # Stats above cover every match; only the listing is capped.
        return AttendanceDashboard(
            result=result,
            records=records[: self._row_limit],
            truncated=len(records) > self._row_limit,
            criteria=criteria,
            options=self._attendance.filter_options(),
        )

    def landing_stats(self, *, now: Optional[datetime] = None) -> dict:
        month = resolve_period(Period.THIS_MONTH, now=now or now_local())
        return self._attendance.count_summary(month_start=month.start, month_end=month.end)
