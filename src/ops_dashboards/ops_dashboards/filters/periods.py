from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..common.datetime_utils import add_months, as_date, first_of_month, start_of_week
from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period
from .model import DateRange

ONE_DAY = timedelta(days=1)


def coerce_period(value: Union[Period, str, None]) -> Period:
    """Map a raw keyword to `Period`; unknown or empty values mean ALL."""
    if isinstance(value, Period):
        return value
    try:
        return Period((value or "").strip().lower())
    except ValueError:
        return Period.ALL


def resolve_period(
    period: Union[Period, str, None],
    explicit_from: Optional[date] = None,
    explicit_to: Optional[date] = None,
    *,
    now: datetime,
    week_start: int = DEFAULT_WEEK_START,
) -> Optional[DateRange]:
    """Turn a symbolic period into a concrete half-open `[start, end)` range.

    Returns None when no date constraint applies. For CUSTOM the explicit
    bounds are date-only and inclusive, so `explicit_to` becomes the
    exclusive bound of the following day.
    """
    period = coerce_period(period)
    today = as_date(now)

    if period is Period.TODAY:
        return DateRange(today, today + ONE_DAY)

    if period is Period.THIS_WEEK:
        monday = start_of_week(today, week_start=week_start)
        return DateRange(monday, monday + timedelta(days=7))

    if period is Period.THIS_MONTH:
        first = first_of_month(today)
        return DateRange(first, add_months(first, 1))

    if period is Period.LAST_MONTH:
        first = first_of_month(today)
        return DateRange(add_months(first, -1), first)

    if period is Period.CUSTOM:
        start = as_date(explicit_from) if explicit_from else None
        end = as_date(explicit_to) + ONE_DAY if explicit_to else None
        if start is None and end is None:
            return None
        return DateRange(start, end)

    return None


def rolling_month(now: datetime) -> DateRange:
    """From the same day one month back up to (and including) today."""
    today = as_date(now)
    return DateRange(add_months(today, -1), today + ONE_DAY)
