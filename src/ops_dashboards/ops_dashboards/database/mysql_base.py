from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def scalar_counts(row: Optional[Dict[str, Any]], keys) -> Dict[str, int]:
    """Coerce SUM/COUNT columns (None or Decimal from the driver) into ints."""
    row = row or {}
    return {k: int(row.get(k) or 0) for k in keys}


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as `time`, `timedelta` or 'HH:MM[:SS]' depending on the connector."""
    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        return time(*(int(p) for p in parts[:3]))
    except ValueError:
        return None
