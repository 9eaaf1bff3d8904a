from datetime import date, datetime

from src.ops_dashboards.ops_dashboards.core.enums import Period
from src.ops_dashboards.ops_dashboards.filters.model import DateRange
from src.ops_dashboards.ops_dashboards.filters.periods import coerce_period, resolve_period, rolling_month


NOW = datetime(2026, 2, 17, 15, 0)  # a Tuesday


def test_all_returns_no_constraint():
    assert resolve_period("all", now=NOW) is None


def test_today_is_a_single_day():
    assert resolve_period("today", now=NOW) == DateRange(date(2026, 2, 17), date(2026, 2, 18))


def test_this_week_starts_on_monday():
    wednesday = datetime(2026, 2, 18, 9, 0)
    assert resolve_period(Period.THIS_WEEK, now=wednesday) == DateRange(date(2026, 2, 16), date(2026, 2, 23))


def test_this_week_on_a_sunday_goes_back_to_monday():
    sunday = datetime(2026, 2, 22, 23, 59)
    assert resolve_period("this-week", now=sunday).start == date(2026, 2, 16)


def test_this_month_and_last_month():
    assert resolve_period("this-month", now=NOW) == DateRange(date(2026, 2, 1), date(2026, 3, 1))
    assert resolve_period("last-month", now=NOW) == DateRange(date(2026, 1, 1), date(2026, 2, 1))


def test_last_month_in_january_crosses_the_year():
    assert resolve_period("last-month", now=datetime(2026, 1, 10)) == DateRange(date(2025, 12, 1), date(2026, 1, 1))


def test_custom_with_only_from_date_is_open_ended():
    r = resolve_period("custom", date(2026, 2, 1), None, now=NOW)
    assert r == DateRange(date(2026, 2, 1), None)
    assert r.contains(date(2030, 1, 1))
    assert not r.contains(date(2026, 1, 31))


def test_custom_to_date_is_inclusive():
    r = resolve_period("custom", date(2026, 2, 1), date(2026, 2, 10), now=NOW)
    assert r.contains(date(2026, 2, 10))
    assert not r.contains(date(2026, 2, 11))


def test_custom_without_bounds_behaves_like_all():
    assert resolve_period("custom", now=NOW) is None


def test_unknown_period_is_all():
    assert coerce_period("yesterday") is Period.ALL
    assert coerce_period(None) is Period.ALL
    assert resolve_period("yesterday", now=NOW) is None


def test_rolling_month_clamps_to_month_end():
    assert rolling_month(datetime(2026, 3, 31, 10, 0)) == DateRange(date(2026, 2, 28), date(2026, 4, 1))
