from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    return parse_iso_date(v)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_date(value: DateLike) -> date:
    """Strip the time-of-day part (datetime is a subclass of date)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_week(day: date, *, week_start: int = 0) -> date:
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
