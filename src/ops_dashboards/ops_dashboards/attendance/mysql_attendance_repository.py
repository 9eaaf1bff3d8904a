from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar_counts
from ..filters.model import Predicate
from ..filters.sql import compile_where
from .model import AttendanceRecord
from .repository import AttendanceRepository

FULL_NAME_SQL = "CONCAT(COALESCE(a.first_name, ''), CASE WHEN a.last_name IS NOT NULL THEN CONCAT(' ', a.last_name) ELSE '' END)"

COLUMNS = {
    "store_name": "a.store_name",
    "company": "a.company",
    "worker_type": "a.worker_type",
    "full_name": FULL_NAME_SQL,
    "attendance_date": "a.attendance_date",
}


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_filtered(self, predicate: Predicate) -> Sequence[AttendanceRecord]:
        where, params = compile_where(predicate, COLUMNS)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.record_id, a.upload_batch_id, a.store_name, a.store_code,
                       a.first_name, a.last_name, a.company, a.worker_type,
                       a.attendance_date, a.time_in, a.time_out, a.total_hours,
                       a.uploaded_by, u.display_name AS uploaded_by_name
                FROM thirdparty_attendance a
                LEFT JOIN users u ON u.user_id = a.uploaded_by
                WHERE {where}
                ORDER BY a.attendance_date DESC, a.store_name ASC, a.company ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    record_id=int(r["record_id"]),
                    store_name=r.get("store_name"),
                    store_code=r.get("store_code"),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    company=r.get("company"),
                    worker_type=r.get("worker_type"),
                    attendance_date=r.get("attendance_date"),
                    time_in=r.get("time_in"),
                    time_out=r.get("time_out"),
                    total_hours=r.get("total_hours"),
                    uploaded_by=r.get("uploaded_by"),
                    uploaded_by_name=r.get("uploaded_by_name"),
                    upload_batch_id=r.get("upload_batch_id"),
                )
                for r in rows
            ]

    def filter_options(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            options: dict[str, list] = {}
            for key, column in (
                ("stores", "store_name"),
                ("companies", "company"),
                ("worker_types", "worker_type"),
            ):
                cur.execute(
                    f"SELECT DISTINCT {column} AS v FROM thirdparty_attendance WHERE {column} IS NOT NULL ORDER BY v"
                )
                options[key] = [r["v"] for r in fetchall(cur)]

            cur.execute(
                f"""
                SELECT DISTINCT {FULL_NAME_SQL} AS v
                FROM thirdparty_attendance a
                WHERE a.first_name IS NOT NULL
                ORDER BY v
                """
            )
            options["names"] = [r["v"] for r in fetchall(cur)]
            return options

    def count_summary(self, *, month_start: date, month_end: date) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS Total,
                       COUNT(DISTINCT company) AS Companies,
                       SUM(CASE WHEN attendance_date >= %s AND attendance_date < %s THEN 1 ELSE 0 END) AS ThisMonth
                FROM thirdparty_attendance
                """,
                (month_start, month_end),
            )
            return scalar_counts(fetchone(cur), ("Total", "Companies", "ThisMonth"))
