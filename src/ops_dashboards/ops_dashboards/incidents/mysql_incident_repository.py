from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import IncidentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar_counts
from ..filters.model import DateRange, Predicate
from ..filters.sql import compile_where
from .model import IncidentPhoto, TheftIncident
from .repository import IncidentRepository

COLUMNS = {
    "store": "t.store",
    "status": "t.status",
    "incident_date": "t.incident_date",
}

SELECT_SQL = """
    SELECT t.incident_id, t.store, t.incident_date, t.store_manager, t.staff_name,
           t.stolen_items, t.stolen_value, t.value_collected, t.currency, t.amount_to_ho,
           t.capture_method, t.security_type, t.outsource_company,
           t.thief_name, t.thief_surname, t.id_card,
           t.status, t.review_notes, t.reviewed_by, t.reviewed_at,
           t.created_by, t.created_at, t.updated_at,
           u.display_name AS created_by_name,
           rv.display_name AS reviewed_by_name,
           (SELECT COUNT(*) FROM theft_incident_photos p WHERE p.incident_id = t.incident_id) AS photo_count
    FROM theft_incidents t
    LEFT JOIN users u ON u.user_id = t.created_by
    LEFT JOIN users rv ON rv.user_id = t.reviewed_by
"""

DETAIL_KEYS = ("store_manager", "staff_name", "currency", "amount_to_ho", "security_type", "outsource_company", "id_card")


def _to_incident(r: dict) -> TheftIncident:
    return TheftIncident(
        incident_id=int(r["incident_id"]),
        store=r.get("store"),
        incident_date=r.get("incident_date"),
        status=r.get("status"),
        stolen_items=r.get("stolen_items"),
        stolen_value=r.get("stolen_value"),
        value_collected=r.get("value_collected"),
        capture_method=r.get("capture_method"),
        thief_name=r.get("thief_name"),
        thief_surname=r.get("thief_surname"),
        created_by=r.get("created_by"),
        created_by_name=r.get("created_by_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        review_notes=r.get("review_notes"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_by_name=r.get("reviewed_by_name"),
        reviewed_at=r.get("reviewed_at"),
        photo_count=int(r.get("photo_count") or 0),
        details={k: r.get(k) for k in DETAIL_KEYS},
    )


class MySQLIncidentRepository(IncidentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_filtered(self, predicate: Predicate) -> Sequence[TheftIncident]:
        where, params = compile_where(predicate, COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {SELECT_SQL}
                WHERE {where}
                ORDER BY
                    CASE WHEN t.status = %s THEN 0
                         WHEN t.status = %s THEN 1
                         ELSE 2 END,
                    t.incident_date DESC, t.incident_id DESC
                """,
                tuple(params + [IncidentStatus.OPEN.value, IncidentStatus.PENDING.value]),
            )
            return [_to_incident(r) for r in fetchall(cur)]

    def get_incident(self, *, incident_id: int) -> Optional[TheftIncident]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{SELECT_SQL} WHERE t.incident_id=%s", (int(incident_id),))
            r = fetchone(cur)
            return _to_incident(r) if r else None

    def list_photos(self, *, incident_id: int) -> Sequence[IncidentPhoto]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT photo_id, incident_id, file_name, original_name, file_path,
                       file_size, mime_type, uploaded_at
                FROM theft_incident_photos
                WHERE incident_id=%s
                ORDER BY photo_id ASC
                """,
                (int(incident_id),),
            )
            return [
                IncidentPhoto(
                    photo_id=int(r["photo_id"]),
                    incident_id=int(r["incident_id"]),
                    file_name=r["file_name"],
                    original_name=r.get("original_name"),
                    file_path=r.get("file_path"),
                    file_size=r.get("file_size"),
                    mime_type=r.get("mime_type"),
                    uploaded_at=r.get("uploaded_at"),
                )
                for r in fetchall(cur)
            ]

    def totals(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total,
                       SUM(CASE WHEN status = %s THEN 1 ELSE 0 END) AS openCount,
                       SUM(CASE WHEN status = %s THEN 1 ELSE 0 END) AS pendingCount,
                       SUM(CASE WHEN status = %s THEN 1 ELSE 0 END) AS reviewedCount,
                       SUM(CASE WHEN status = %s THEN 1 ELSE 0 END) AS closedCount,
                       SUM(stolen_value) AS totalStolenValue,
                       SUM(value_collected) AS totalCollected
                FROM theft_incidents
                """,
                tuple(s.value for s in IncidentStatus),
            )
            row = fetchone(cur) or {}
            out = scalar_counts(row, ("total", "openCount", "pendingCount", "reviewedCount", "closedCount"))
            out["totalStolenValue"] = row.get("totalStolenValue") or Decimal("0")
            out["totalCollected"] = row.get("totalCollected") or Decimal("0")
            return out

    def list_stores(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT store FROM theft_incidents WHERE store IS NOT NULL ORDER BY store")
            return [r["store"] for r in fetchall(cur)]

    def count_summary(self, *, today: DateRange, month: DateRange, pending_statuses: Sequence[str]) -> dict:
        statuses = tuple(pending_statuses)
        placeholders = ",".join(["%s"] * len(statuses))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT SUM(CASE WHEN status IN ({placeholders}) THEN 1 ELSE 0 END) AS pending,
                       SUM(CASE WHEN created_at >= %s AND created_at < %s THEN 1 ELSE 0 END) AS today,
                       SUM(CASE WHEN created_at >= %s AND created_at < %s THEN 1 ELSE 0 END) AS month
                FROM theft_incidents
                """,
                (*statuses, today.start, today.end, month.start, month.end),
            )
            return scalar_counts(fetchone(cur), ("pending", "today", "month"))

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
        # theft incidents carry no approver slot columns
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE theft_incidents
                SET status=%s, review_notes=%s, reviewed_by=%s, reviewed_at=%s, updated_at=%s
                WHERE incident_id=%s
                """,
                (status, review_notes, actor_id, at, at, int(request_id)),
            )
