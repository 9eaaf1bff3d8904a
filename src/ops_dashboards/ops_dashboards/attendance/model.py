from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class AttendanceRecord:
    """One uploaded third-party attendance line."""

    record_id: int
    store_name: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    company: Optional[str]
    worker_type: Optional[str]
    attendance_date: Optional[date]
    total_hours: Optional[str] = None
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    store_code: Optional[str] = None
    uploaded_by: Optional[int] = None
    uploaded_by_name: Optional[str] = None
    upload_batch_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        name = self.first_name or ""
        if self.last_name is not None:
            name += " " + self.last_name
        return name

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "store_name": self.store_name,
            "store_code": self.store_code,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "company": self.company,
            "worker_type": self.worker_type,
            "attendance_date": self.attendance_date.strftime("%Y-%m-%d") if self.attendance_date else None,
            "time_in": self.time_in,
            "time_out": self.time_out,
            "total_hours": self.total_hours,
            "uploaded_by_name": self.uploaded_by_name,
            "upload_batch_id": self.upload_batch_id,
        }


@dataclass(frozen=True)
class OverallStats:
    total_records: int
    unique_stores: int
    unique_companies: int
    unique_days: int
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "TotalRecords": self.total_records,
            "UniqueStores": self.unique_stores,
            "UniqueCompanies": self.unique_companies,
            "UniqueDays": self.unique_days,
            "TotalHours": round(self.total_hours, 2),
        }


@dataclass(frozen=True)
class GroupRow:
    group_key: object
    record_count: int
    secondary_count: int
    tertiary_count: int
    total_hours: float

    def to_dict(self, labels: Tuple[str, str]) -> dict:
        key = self.group_key
        if isinstance(key, (date, datetime)):
            key = key.strftime("%Y-%m-%d")
        return {
            "GroupKey": key,
            "RecordCount": self.record_count,
            labels[0]: self.secondary_count,
            labels[1]: self.tertiary_count,
            "TotalHours": round(self.total_hours, 2),
        }


@dataclass(frozen=True)
class AggregationResult:
    overall: OverallStats
    group_by: Optional[str] = None
    groups: Tuple[GroupRow, ...] = field(default_factory=tuple)
    labels: Tuple[str, str] = ("", "")

    def to_dict(self) -> dict:
        return {
            "summary": self.overall.to_dict(),
            "groupBy": self.group_by or "none",
            "groups": [g.to_dict(self.labels) for g in self.groups],
        }
