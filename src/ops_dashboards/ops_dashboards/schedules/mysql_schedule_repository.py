from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence, Tuple

from ..core.enums import ScheduleKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, scalar_counts
from ..filters.model import DateRange, Predicate
from ..filters.sql import compile_where
from .model import WEEKDAYS, DayShift, ScheduleEmployeeRow, ScheduleRecord
from .repository import ScheduleRepository


@dataclass(frozen=True)
class ScheduleTables:
    kind: ScheduleKind
    header: str
    employees: str
    # employee columns beyond the common set
    extra_columns: Tuple[str, ...] = ()


SECURITY_TABLES = ScheduleTables(
    kind=ScheduleKind.SECURITY,
    header="security_schedules",
    employees="security_schedule_employees",
    extra_columns=("location_covered", "phone_number"),
)

THIRDPARTY_TABLES = ScheduleTables(
    kind=ScheduleKind.THIRDPARTY,
    header="thirdparty_schedules",
    employees="thirdparty_schedule_employees",
)

COLUMNS = {
    "store_name": "s.store_name",
    "from_date": "s.from_date",
    "to_date": "s.to_date",
}

DAY_COLUMNS = ", ".join(f"{d}_from, {d}_to" for d in WEEKDAYS)


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection, tables: ScheduleTables):
        self._conn_factory = conn_factory
        self._t = tables

    def _to_record(self, r: dict, employees=()) -> ScheduleRecord:
        return ScheduleRecord(
            schedule_id=int(r["schedule_id"]),
            kind=self._t.kind,
            store_id=r.get("store_id"),
            store_name=r.get("store_name"),
            from_date=r.get("from_date"),
            to_date=r.get("to_date"),
            status=r.get("status"),
            created_by=r.get("created_by"),
            created_by_name=r.get("created_by_name"),
            created_at=r.get("created_at"),
            employee_count=int(r.get("employee_count") or len(employees)),
            employees=tuple(employees),
        )

    @staticmethod
    def _to_employee(r: dict) -> ScheduleEmployeeRow:
        return ScheduleEmployeeRow(
            row_id=int(r["row_id"]),
            company_name=r.get("company_name"),
            employee_code=r.get("employee_code"),
            employee_name=r.get("employee_name"),
            position=r.get("employee_position"),
            location_covered=r.get("location_covered"),
            phone_number=r.get("phone_number"),
            shifts=tuple(
                DayShift(d, normalize_mysql_time(r.get(f"{d}_from")), normalize_mysql_time(r.get(f"{d}_to")))
                for d in WEEKDAYS
            ),
        )

    def list_filtered(self, predicate: Predicate) -> Sequence[ScheduleRecord]:
        where, params = compile_where(predicate, COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.schedule_id, s.store_id, s.store_name, s.from_date, s.to_date,
                       s.status, s.created_by, s.created_at,
                       (SELECT COUNT(*) FROM {self._t.employees} e WHERE e.schedule_id = s.schedule_id) AS employee_count,
                       u.display_name AS created_by_name
                FROM {self._t.header} s
                LEFT JOIN users u ON u.user_id = s.created_by
                WHERE {where}
                ORDER BY s.created_at DESC, s.schedule_id DESC
                """,
                tuple(params),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def get_schedule(self, *, schedule_id: int) -> Optional[ScheduleRecord]:
        extra = "".join(f", {c}" for c in self._t.extra_columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.schedule_id, s.store_id, s.store_name, s.from_date, s.to_date,
                       s.status, s.created_by, s.created_at, u.display_name AS created_by_name
                FROM {self._t.header} s
                LEFT JOIN users u ON u.user_id = s.created_by
                WHERE s.schedule_id=%s
                """,
                (int(schedule_id),),
            )
            header = fetchone(cur)
            if not header:
                return None

            cur.execute(
                f"""
                SELECT row_id, company_name, employee_code, employee_name, employee_position{extra},
                       {DAY_COLUMNS}
                FROM {self._t.employees}
                WHERE schedule_id=%s
                ORDER BY row_id ASC
                """,
                (int(schedule_id),),
            )
            employees = [self._to_employee(r) for r in fetchall(cur)]
            return self._to_record(header, employees)

    def list_stores(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT DISTINCT store_name FROM {self._t.header} WHERE store_name IS NOT NULL ORDER BY store_name"
            )
            return [r["store_name"] for r in fetchall(cur)]

    def count_summary(self, *, today: date, month: DateRange, week: DateRange) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS Total,
                       SUM(CASE WHEN from_date <= %s AND to_date >= %s THEN 1 ELSE 0 END) AS Active,
                       SUM(CASE WHEN from_date >= %s AND from_date < %s THEN 1 ELSE 0 END) AS ThisMonth,
                       SUM(CASE WHEN from_date >= %s AND from_date < %s THEN 1 ELSE 0 END) AS ThisWeek
                FROM {self._t.header}
                """,
                (today, today, month.start, month.end, week.start, week.end),
            )
            return scalar_counts(fetchone(cur), ("Total", "Active", "ThisMonth", "ThisWeek"))
