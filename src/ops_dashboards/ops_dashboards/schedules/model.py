from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Tuple

from ..common.datetime_utils import as_date
from ..core.enums import ScheduleKind

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class DayShift:
    day: str
    time_from: Optional[time] = None
    time_to: Optional[time] = None

    def to_dict(self) -> dict:
        return {"day": self.day, "from": self.time_from, "to": self.time_to}


@dataclass(frozen=True)
class ScheduleEmployeeRow:
    row_id: int
    employee_name: Optional[str]
    company_name: Optional[str] = None
    employee_code: Optional[str] = None
    position: Optional[str] = None
    location_covered: Optional[str] = None
    phone_number: Optional[str] = None
    # one entry per weekday, Monday first
    shifts: Tuple[DayShift, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.row_id,
            "company_name": self.company_name,
            "employee_id": self.employee_code,
            "employee_name": self.employee_name,
            "position": self.position,
            "location_covered": self.location_covered,
            "phone_number": self.phone_number,
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass(frozen=True)
class ScheduleRecord:
    """A store's staffing schedule over the inclusive span [from_date, to_date]."""

    schedule_id: int
    kind: ScheduleKind
    store_name: Optional[str]
    from_date: Optional[date]
    to_date: Optional[date]
    status: Optional[str]
    store_id: Optional[int] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    employee_count: int = 0
    employees: Tuple[ScheduleEmployeeRow, ...] = field(default_factory=tuple)

    def is_active(self, day: date) -> bool:
        if self.from_date is None or self.to_date is None:
            return False
        return as_date(self.from_date) <= as_date(day) <= as_date(self.to_date)

    def to_dict(self, *, with_employees: bool = False) -> dict:
        data = {
            "id": self.schedule_id,
            "kind": self.kind.value,
            "store_id": self.store_id,
            "store_name": self.store_name,
            "from_date": self.from_date,
            "to_date": self.to_date,
            "status": self.status,
            "created_by_name": self.created_by_name,
            "created_at": self.created_at,
            "employee_count": self.employee_count,
        }
        if with_employees:
            data["employees"] = [e.to_dict() for e in self.employees]
        return data
