from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Mapping, Optional, Tuple, Union

from ..common.datetime_utils import parse_optional_date
from ..core.enums import FilterOp
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange:
    """Half-open date interval `[start, end)`; a missing bound is unbounded."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day >= self.end:
            return False
        return True

    def overlaps(self, first: date, last: date) -> bool:
        """True if the inclusive span `[first, last]` meets this range."""
        if self.end is not None and first >= self.end:
            return False
        if self.start is not None and last < self.start:
            return False
        return True


# A field is a record attribute name, or a (from, to) pair for range overlaps.
FieldRef = Union[str, Tuple[str, str]]


@dataclass(frozen=True)
class Condition:
    field: FieldRef
    op: FilterOp
    value: Any


Predicate = Tuple[Condition, ...]


@dataclass(frozen=True)
class FilterCriteria:
    """Request-scoped bag of optional dashboard filters."""

    store: Optional[str] = None
    company: Optional[str] = None
    worker_type: Optional[str] = None
    status: Optional[str] = None
    name: Optional[str] = None
    period: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    # query-string name -> attribute
    QUERY_KEYS = {
        "store": "store",
        "company": "company",
        "workerType": "worker_type",
        "status": "status",
        "name": "name",
        "period": "period",
        "fromDate": "from_date",
        "toDate": "to_date",
        "dateFrom": "from_date",
        "dateTo": "to_date",
    }

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "FilterCriteria":
        """Build criteria from query-string style keys; unknown keys are ignored.

        Dates may be `date` objects or YYYY-MM-DD strings.
        """
        values: dict[str, Any] = {}
        for key, attr in cls.QUERY_KEYS.items():
            raw = args.get(key)
            if raw is None or attr in values:
                continue
            if attr in {"from_date", "to_date"} and isinstance(raw, str):
                try:
                    raw = parse_optional_date(raw)
                except ValueError:
                    raise ValidationError(f"{key} must be a YYYY-MM-DD date")
            elif isinstance(raw, str):
                raw = raw.strip() or None
            if raw is not None:
                values[attr] = raw
        return cls(**values)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
