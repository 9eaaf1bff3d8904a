from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar_counts
from ..filters.model import DateRange, Predicate
from ..filters.sql import compile_where
from .model import WeeklyFeedback
from .repository import FeedbackRepository

COLUMNS = {
    "store_id": "store_id",
    "week_start_date": "week_start_date",
    "overall_rating": "overall_rating",
}

SELECT_SQL = """
    SELECT feedback_id, store_id, store_name, week_start_date, week_end_date,
           store_manager_name, overall_rating, cleanliness_rating,
           punctuality_rating, communication_rating, comments, created_at
    FROM weekly_thirdparty_feedback
"""


def _to_feedback(r: dict) -> WeeklyFeedback:
    return WeeklyFeedback(
        feedback_id=int(r["feedback_id"]),
        store_id=r.get("store_id"),
        store_name=r.get("store_name"),
        week_start_date=r.get("week_start_date"),
        week_end_date=r.get("week_end_date"),
        store_manager_name=r.get("store_manager_name"),
        overall_rating=r.get("overall_rating"),
        cleanliness_rating=r.get("cleanliness_rating"),
        punctuality_rating=r.get("punctuality_rating"),
        communication_rating=r.get("communication_rating"),
        comments=r.get("comments"),
        created_at=r.get("created_at"),
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_filtered(self, predicate: Predicate) -> Sequence[WeeklyFeedback]:
        where, params = compile_where(predicate, COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{SELECT_SQL} WHERE {where} ORDER BY created_at DESC, feedback_id DESC", tuple(params))
            return [_to_feedback(r) for r in fetchall(cur)]

    def get_feedback(self, *, feedback_id: int) -> Optional[WeeklyFeedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{SELECT_SQL} WHERE feedback_id=%s", (int(feedback_id),))
            r = fetchone(cur)
            return _to_feedback(r) if r else None

    def averages(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT AVG(overall_rating) AS avgOverall,
                       AVG(cleanliness_rating) AS avgCleanliness,
                       AVG(punctuality_rating) AS avgPunctuality,
                       AVG(communication_rating) AS avgCommunication
                FROM weekly_thirdparty_feedback
                """
            )
            row = fetchone(cur) or {}
            return {k: float(row.get(k) or 0) for k in ("avgOverall", "avgCleanliness", "avgPunctuality", "avgCommunication")}

    def list_stores(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT store_id, store_name FROM weekly_thirdparty_feedback ORDER BY store_name"
            )
            return fetchall(cur)

    def list_weeks(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT week_start_date, week_end_date
                FROM weekly_thirdparty_feedback
                ORDER BY week_start_date DESC
                """
            )
            return fetchall(cur)

    def count_summary(self, *, today: DateRange, week: DateRange, month: DateRange) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total,
                       SUM(CASE WHEN created_at >= %s AND created_at < %s THEN 1 ELSE 0 END) AS today,
                       SUM(CASE WHEN created_at >= %s AND created_at < %s THEN 1 ELSE 0 END) AS thisWeek,
                       SUM(CASE WHEN created_at >= %s AND created_at < %s THEN 1 ELSE 0 END) AS thisMonth
                FROM weekly_thirdparty_feedback
                """,
                (today.start, today.end, week.start, week.end, month.start, month.end),
            )
            return scalar_counts(fetchone(cur), ("total", "today", "thisWeek", "thisMonth"))
