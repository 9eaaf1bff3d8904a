from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import as_date
from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import FilterOp, Period
from .model import Condition, DateRange, FieldRef, FilterCriteria, Predicate
from .periods import resolve_period

# Criteria attributes matched exactly vs. by case-insensitive substring.
EXACT_CRITERIA = ("store", "company", "worker_type", "status")
SUBSTRING_CRITERIA = ("name",)


@dataclass(frozen=True)
class FieldMap:
    """Which record field each criterion targets, for one dashboard.

    Criteria without an entry are not supported by that dashboard and are
    silently dropped. `date` may be a single field or a (from, to) pair; a
    pair switches the date constraint to overlap semantics.
    """

    fields: Mapping[str, FieldRef] = field(default_factory=dict)
    default_period: Period = Period.ALL
    # Status values meaning "no status filter".
    status_wildcards: frozenset = frozenset({"all"})

    def get(self, criterion: str) -> Optional[FieldRef]:
        return self.fields.get(criterion)


def _criterion_value(criteria: FilterCriteria, name: str) -> Optional[str]:
    value = getattr(criteria, name, None)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def build_predicate(
    criteria: FilterCriteria,
    fields: FieldMap,
    *,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
) -> Predicate:
    """Translate filter criteria into a structured list of conditions.

    Each non-empty supported criterion yields exactly one condition; the
    period/fromDate/toDate trio yields at most one date condition.
    """
    conditions: list[Condition] = []

    for name in EXACT_CRITERIA:
        target = fields.get(name)
        value = _criterion_value(criteria, name)
        if target is None or value is None:
            continue
        if name == "status" and value.lower() in fields.status_wildcards:
            continue
        conditions.append(Condition(target, FilterOp.EQUALS, value))

    for name in SUBSTRING_CRITERIA:
        target = fields.get(name)
        value = _criterion_value(criteria, name)
        if target is None or value is None:
            continue
        conditions.append(Condition(target, FilterOp.SUBSTRING, value))

    date_target = fields.get("date")
    if date_target is not None:
        period = criteria.period if criteria.period else fields.default_period
        date_range = resolve_period(
            period,
            criteria.from_date,
            criteria.to_date,
            now=now,
            week_start=week_start,
        )
        if date_range is not None:
            conditions.append(date_condition(date_target, date_range))

    return tuple(conditions)


def _normalize(value: Any) -> str:
    return "" if value is None else str(value)


def condition_holds(record: Any, condition: Condition) -> bool:
    op = condition.op

    if op is FilterOp.RANGE_OVERLAPS:
        first_field, last_field = condition.field
        first = getattr(record, first_field, None)
        last = getattr(record, last_field, None)
        if first is None or last is None:
            return False
        return condition.value.overlaps(as_date(first), as_date(last))

    actual = getattr(record, condition.field, None)

    if op is FilterOp.EQUALS:
        return actual is not None and _normalize(actual) == _normalize(condition.value)

    if op is FilterOp.SUBSTRING:
        return _normalize(condition.value).lower() in _normalize(actual).lower()

    if op is FilterOp.DATE_RANGE:
        if actual is None:
            return False
        return condition.value.contains(as_date(actual))

    raise ValueError(f"Unsupported filter operator: {op!r}")


def matches(record: Any, predicate: Predicate) -> bool:
    return all(condition_holds(record, c) for c in predicate)


def date_condition(field_ref: FieldRef, date_range: DateRange) -> Condition:
    op = FilterOp.RANGE_OVERLAPS if isinstance(field_ref, tuple) else FilterOp.DATE_RANGE
    return Condition(field_ref, op, date_range)
