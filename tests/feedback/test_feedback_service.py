from datetime import date, datetime

import pytest

from src.ops_dashboards.ops_dashboards.core.enums import FilterOp
from src.ops_dashboards.ops_dashboards.core.exceptions import NotFoundError, ValidationError
from src.ops_dashboards.ops_dashboards.feedback.model import FeedbackCriteria, WeeklyFeedback
from src.ops_dashboards.ops_dashboards.feedback.service import FeedbackDashboardService
from src.ops_dashboards.ops_dashboards.filters.builder import matches
from src.ops_dashboards.ops_dashboards.filters.sql import compile_where
from src.ops_dashboards.ops_dashboards.feedback.mysql_feedback_repository import COLUMNS


class FakeFeedbackRepo:
    def __init__(self, rows):
        self._rows = list(rows)
        self.summary_args = None

    def list_filtered(self, predicate):
        return [r for r in self._rows if matches(r, predicate)]

    def get_feedback(self, *, feedback_id):
        return next((r for r in self._rows if r.feedback_id == feedback_id), None)

    def averages(self):
        n = len(self._rows)
        return {"avgOverall": sum(r.overall_rating for r in self._rows) / n if n else 0}

    def list_stores(self):
        return [{"store_id": 1, "store_name": "Main"}]

    def list_weeks(self):
        return [{"week_start_date": date(2026, 2, 9), "week_end_date": date(2026, 2, 15)}]

    def count_summary(self, *, today, week, month):
        self.summary_args = (today, week, month)
        return {"total": len(self._rows), "today": 0, "thisWeek": 0, "thisMonth": 0}


def fb(fid, store_id, week, rating):
    return WeeklyFeedback(
        feedback_id=fid,
        store_id=store_id,
        store_name=f"Store {store_id}",
        week_start_date=week,
        week_end_date=None,
        overall_rating=rating,
    )


ROWS = [
    fb(1, 1, date(2026, 2, 9), 5),
    fb(2, 1, date(2026, 2, 2), 3),
    fb(3, 2, date(2026, 2, 9), 5),
]


def test_criteria_from_query_args():
    criteria = FeedbackCriteria.from_args({"store": "1", "week": "2026-02-09", "rating": ""})
    assert criteria == FeedbackCriteria(store_id=1, week_start=date(2026, 2, 9), rating=None)


@pytest.mark.parametrize("args", [{"store": "1 OR 1=1"}, {"rating": "five"}, {"week": "2026-13-01"}])
def test_malformed_filters_are_validation_errors(args):
    with pytest.raises(ValidationError):
        FeedbackCriteria.from_args(args)


def test_filters_compile_to_bound_parameters():
    predicate = FeedbackCriteria(store_id=2, week_start=date(2026, 2, 9), rating=5).to_predicate()
    assert all(c.op is FilterOp.EQUALS for c in predicate)

    sql, params = compile_where(predicate, COLUMNS)
    assert sql == "store_id = %s AND week_start_date = %s AND overall_rating = %s"
    assert params == [2, date(2026, 2, 9), 5]


def test_dashboard_applies_store_week_and_rating():
    svc = FeedbackDashboardService(FakeFeedbackRepo(ROWS))

    data = svc.build_dashboard(FeedbackCriteria(week_start=date(2026, 2, 9), rating=5))

    assert [r["id"] for r in data["feedback"]] == [1, 3]
    assert data["feedback"][0]["reference"] == "WF-1"
    assert data["averages"]["avgOverall"] == pytest.approx(13 / 3)
    assert data["filters"]["week"] == date(2026, 2, 9)


def test_stats_periods():
    repo = FakeFeedbackRepo(ROWS)
    FeedbackDashboardService(repo).landing_stats(now=datetime(2026, 2, 18, 12, 0))

    today, week, month = repo.summary_args
    assert today.start == date(2026, 2, 18)
    assert (week.start, week.end) == (date(2026, 2, 16), date(2026, 2, 23))
    assert month.start == date(2026, 2, 1)


def test_missing_feedback_is_not_found():
    with pytest.raises(NotFoundError):
        FeedbackDashboardService(FakeFeedbackRepo(ROWS)).get_feedback(42)
