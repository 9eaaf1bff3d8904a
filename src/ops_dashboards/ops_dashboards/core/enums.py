from __future__ import annotations

from enum import Enum


class Period(str, Enum):
    """Symbolic date periods accepted by dashboard filters."""

    ALL = "all"
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    CUSTOM = "custom"


class FilterOp(str, Enum):
    EQUALS = "equals"
    SUBSTRING = "substring"
    DATE_RANGE = "date_range"
    RANGE_OVERLAPS = "range_overlaps"


class GroupKey(str, Enum):
    """Pivot dimensions of the attendance dashboard."""

    STORE = "store"
    COMPANY = "company"
    WORKER_TYPE = "workerType"
    DATE = "date"
    NAME = "name"


class ApprovalStatus(str, Enum):
    """Statuses of cleaning / production extra requests and their approver slots."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class IncidentStatus(str, Enum):
    """Theft incident review workflow."""

    OPEN = "Open"
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    CLOSED = "Closed"


class RequestKind(str, Enum):
    """Record families handled by the status transition gate."""

    EXTRA_CLEANING = "extra-cleaning"
    PRODUCTION_EXTRAS = "production-extras"
    THEFT_INCIDENT = "theft-incident"


class ScheduleKind(str, Enum):
    SECURITY = "security"
    THIRDPARTY = "thirdparty"
