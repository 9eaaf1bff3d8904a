"""Pivot/summary engine behind the attendance dashboard.

Everything here is a pure function of its inputs: the caller hands over the
candidate records, the predicate is re-applied in memory, and the result is
computed over the full filtered set.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..common.datetime_utils import as_date
from ..core.enums import GroupKey
from ..filters.builder import matches
from ..filters.duration import total_hours
from ..filters.model import Predicate
from .model import AggregationResult, AttendanceRecord, GroupRow, OverallStats


def _day(r: AttendanceRecord):
    return as_date(r.attendance_date) if r.attendance_date is not None else None


@dataclass(frozen=True)
class Grouping:
    key: Callable[[AttendanceRecord], Any]
    secondary: Callable[[AttendanceRecord], Any]
    tertiary: Callable[[AttendanceRecord], Any]
    labels: tuple


GROUPINGS: Dict[GroupKey, Grouping] = {
    GroupKey.STORE: Grouping(lambda r: r.store_name, lambda r: r.company, _day, ("Companies", "Days")),
    GroupKey.COMPANY: Grouping(lambda r: r.company, lambda r: r.store_name, _day, ("Stores", "Days")),
    GroupKey.WORKER_TYPE: Grouping(lambda r: r.worker_type, lambda r: r.company, _day, ("Companies", "Days")),
    GroupKey.DATE: Grouping(_day, lambda r: r.company, lambda r: r.store_name, ("Companies", "Stores")),
    GroupKey.NAME: Grouping(lambda r: r.full_name, lambda r: r.company, _day, ("Companies", "Days")),
}


def coerce_group_key(value: Union[GroupKey, str, None]) -> Optional[GroupKey]:
    """`None`, "none" and unknown keys mean no grouping."""
    if isinstance(value, GroupKey):
        return value
    try:
        return GroupKey((value or "").strip())
    except ValueError:
        return None


def _distinct(values: Iterable[Any]) -> int:
    # COUNT(DISTINCT ...) ignores NULLs
    return len({v for v in values if v is not None})


def overall_stats(records: Sequence[AttendanceRecord]) -> OverallStats:
    return OverallStats(
        total_records=len(records),
        unique_stores=_distinct(r.store_name for r in records),
        unique_companies=_distinct(r.company for r in records),
        unique_days=_distinct(_day(r) for r in records),
        total_hours=total_hours(r.total_hours for r in records),
    )


def _ascending(row: GroupRow):
    return (row.group_key is not None, row.group_key if row.group_key is not None else "")


def _sort_groups(group_key: GroupKey, rows: List[GroupRow]) -> List[GroupRow]:
    if group_key is GroupKey.NAME:
        return sorted(rows, key=lambda g: (-g.total_hours, g.group_key or ""))
    if group_key is GroupKey.DATE:
        return sorted(rows, key=_ascending, reverse=True)
    return sorted(rows, key=_ascending)


def group_rows(records: Sequence[AttendanceRecord], group_key: GroupKey) -> List[GroupRow]:
    grouping = GROUPINGS[group_key]
    buckets: Dict[Any, List[AttendanceRecord]] = {}
    for r in records:
        buckets.setdefault(grouping.key(r), []).append(r)

    rows = [
        GroupRow(
            group_key=key,
            record_count=len(items),
            secondary_count=_distinct(grouping.secondary(r) for r in items),
            tertiary_count=_distinct(grouping.tertiary(r) for r in items),
            total_hours=total_hours(r.total_hours for r in items),
        )
        for key, items in buckets.items()
    ]
    return _sort_groups(group_key, rows)


def aggregate(
    records: Iterable[AttendanceRecord],
    predicate: Predicate = (),
    group_by: Union[GroupKey, str, None] = None,
) -> AggregationResult:
    filtered = [r for r in records if matches(r, predicate)]
    group_key = coerce_group_key(group_by)

    if group_key is None:
        return AggregationResult(overall=overall_stats(filtered))

    return AggregationResult(
        overall=overall_stats(filtered),
        group_by=group_key.value,
        groups=tuple(group_rows(filtered, group_key)),
        labels=GROUPINGS[group_key].labels,
    )
