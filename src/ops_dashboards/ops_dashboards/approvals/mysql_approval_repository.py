from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence, Tuple

from ..core.enums import RequestKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar_counts
from ..filters.model import DateRange
from .model import ApprovalRequest
from .repository import ApprovalRepository


@dataclass(frozen=True)
class RequestTable:
    """Physical layout of one approval request table.

    Table and column names are code constants; request data is always bound.
    """

    kind: RequestKind
    table: str
    select_sql: str
    created_column: str
    status_column: str
    slot_columns: Mapping[str, str]
    updated_at_column: Optional[str] = None
    updated_by_column: Optional[str] = None
    export_sql: Optional[str] = None


EXTRA_CLEANING_TABLE = RequestTable(
    kind=RequestKind.EXTRA_CLEANING,
    table="extra_cleaning_requests",
    select_sql="""
        SELECT r.request_id, r.store, r.category, r.third_party, r.number_of_agents,
               r.start_date, r.end_date, r.description,
               r.area_manager_status, r.ho_status, r.hr_status, r.overall_status,
               r.created_by, r.created_at, r.updated_at, r.updated_by,
               u.display_name AS created_by_name, u.email AS created_by_email
        FROM extra_cleaning_requests r
        LEFT JOIN users u ON u.user_id = r.created_by
    """,
    created_column="created_at",
    status_column="overall_status",
    slot_columns={
        "area_manager": "area_manager_status",
        "head_office": "ho_status",
        "hr": "hr_status",
    },
    updated_at_column="updated_at",
    updated_by_column="updated_by",
)

PRODUCTION_EXTRAS_TABLE = RequestTable(
    kind=RequestKind.PRODUCTION_EXTRAS,
    table="production_extras_requests",
    select_sql="""
        SELECT r.request_id, r.number_of_agents, r.unit_cost, r.total_cost,
               r.start_datetime, r.end_datetime, r.description,
               r.approver1_email, r.approver2_email,
               r.approver1_status, r.approver2_status, r.status,
               r.created_by, r.created_date,
               o.outlet_name, s.scheme_name, l.location_name,
               c.category_name, tp.third_party_name, sh.shift_name
        FROM production_extras_requests r
        LEFT JOIN production_outlets o ON o.id = r.outlet_id
        LEFT JOIN production_outlet_schemes s ON s.id = r.scheme_id
        LEFT JOIN production_locations l ON l.id = r.location_id
        LEFT JOIN production_categories c ON c.id = r.category_id
        LEFT JOIN production_third_parties tp ON tp.id = r.third_party_id
        LEFT JOIN production_shifts sh ON sh.id = r.shift_id
    """,
    created_column="created_date",
    status_column="status",
    slot_columns={
        "approver1": "approver1_status",
        "approver2": "approver2_status",
    },
    export_sql="""
        SELECT r.request_id AS RequestID, o.outlet_name AS Outlet, s.scheme_name AS Scheme,
               l.location_name AS Location, c.category_name AS Category,
               tp.third_party_name AS ThirdParty, sh.shift_name AS Shift,
               r.number_of_agents AS NumberOfAgents, r.unit_cost AS UnitCost,
               r.total_cost AS TotalCost, r.start_datetime AS StartDateTime,
               r.end_datetime AS EndDateTime, r.description AS Description,
               r.approver1_email AS Approver1Email, r.approver2_email AS Approver2Email,
               r.approver1_status AS Approver1Status, r.approver2_status AS Approver2Status,
               r.status AS Status, r.created_by AS CreatedBy, r.created_date AS CreatedDate
        FROM production_extras_requests r
        LEFT JOIN production_outlets o ON o.id = r.outlet_id
        LEFT JOIN production_outlet_schemes s ON s.id = r.scheme_id
        LEFT JOIN production_locations l ON l.id = r.location_id
        LEFT JOIN production_categories c ON c.id = r.category_id
        LEFT JOIN production_third_parties tp ON tp.id = r.third_party_id
        LEFT JOIN production_shifts sh ON sh.id = r.shift_id
        ORDER BY r.created_date DESC
    """,
)


class MySQLApprovalRepository(ApprovalRepository):
    def __init__(self, conn_factory: DatabaseConnection, table: RequestTable):
        self._conn_factory = conn_factory
        self._table = table

    def _to_request(self, r: dict) -> ApprovalRequest:
        t = self._table
        reserved = {t.status_column, t.created_column, "request_id", *t.slot_columns.values()}
        if t.updated_at_column:
            reserved.add(t.updated_at_column)
        if t.updated_by_column:
            reserved.add(t.updated_by_column)

        return ApprovalRequest(
            request_id=int(r["request_id"]),
            kind=t.kind,
            status=r.get(t.status_column),
            approver_statuses={slot: r.get(col) for slot, col in t.slot_columns.items()},
            created_at=r.get(t.created_column),
            updated_at=r.get(t.updated_at_column) if t.updated_at_column else None,
            updated_by=r.get(t.updated_by_column) if t.updated_by_column else None,
            details={k: v for k, v in r.items() if k not in reserved},
        )

    def list_requests(self) -> Sequence[ApprovalRequest]:
        t = self._table
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{t.select_sql} ORDER BY r.{t.created_column} DESC")
            return [self._to_request(r) for r in fetchall(cur)]

    def get_request(self, *, request_id: int) -> Optional[ApprovalRequest]:
        t = self._table
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{t.select_sql} WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return self._to_request(r) if r else None

    def count_summary(self, *, today: DateRange, month: DateRange, pending_statuses: Sequence[str]) -> dict:
        t = self._table
        statuses: Tuple[str, ...] = tuple(pending_statuses)
        placeholders = ",".join(["%s"] * len(statuses))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS total,
                       SUM(CASE WHEN {t.status_column} IN ({placeholders}) THEN 1 ELSE 0 END) AS pending,
                       SUM(CASE WHEN {t.created_column} >= %s AND {t.created_column} < %s THEN 1 ELSE 0 END) AS today,
                       SUM(CASE WHEN {t.created_column} >= %s AND {t.created_column} < %s THEN 1 ELSE 0 END) AS thisMonth
                FROM {t.table}
                """,
                (*statuses, today.start, today.end, month.start, month.end),
            )
            return scalar_counts(fetchone(cur), ("total", "pending", "today", "thisMonth"))

    def write_status(
        self,
        *,
        request_id: int,
        status: str,
        approver_slots: Sequence[str],
        actor_id: Optional[int],
        at: datetime,
        review_notes: Optional[str] = None,
    ) -> None:
        t = self._table
        assignments = [f"{t.status_column}=%s"]
        params: list[object] = [status]
        for slot in approver_slots:
            assignments.append(f"{t.slot_columns[slot]}=%s")
            params.append(status)
        if t.updated_at_column:
            assignments.append(f"{t.updated_at_column}=%s")
            params.append(at)
        if t.updated_by_column:
            assignments.append(f"{t.updated_by_column}=%s")
            params.append(actor_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {t.table} SET {', '.join(assignments)} WHERE request_id=%s",
                tuple(params + [int(request_id)]),
            )

    def export_rows(self) -> Sequence[dict]:
        t = self._table
        if not t.export_sql:
            raise NotImplementedError(f"No export defined for {t.kind.value}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(t.export_sql)
            return fetchall(cur)
