from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .approvals.mysql_approval_repository import EXTRA_CLEANING_TABLE, PRODUCTION_EXTRAS_TABLE, MySQLApprovalRepository
from .approvals.service import ApprovalReviewService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceDashboardService
from .core.constants import DEFAULT_WEEK_START, DISPLAY_ROW_LIMIT
from .core.enums import RequestKind, ScheduleKind
from .database.connection import DBConfig, DatabaseConnection
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.service import FeedbackDashboardService
from .incidents.mysql_incident_repository import MySQLIncidentRepository
from .incidents.service import TheftReviewService
from .schedules.mysql_schedule_repository import SECURITY_TABLES, THIRDPARTY_TABLES, MySQLScheduleRepository
from .schedules.service import ScheduleDashboardService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_dashboard_service: AttendanceDashboardService
    extra_cleaning_service: ApprovalReviewService
    production_service: ApprovalReviewService
    theft_service: TheftReviewService
    security_schedule_service: ScheduleDashboardService
    thirdparty_schedule_service: ScheduleDashboardService
    feedback_service: FeedbackDashboardService


def build_container(
    *,
    db_config: dict,
    pool_size: Optional[int] = None,
    week_start: int = DEFAULT_WEEK_START,
    row_limit: int = DISPLAY_ROW_LIMIT,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config, pool_size=pool_size))

    attendance_repo = MySQLAttendanceRepository(conn)
    cleaning_repo = MySQLApprovalRepository(conn, EXTRA_CLEANING_TABLE)
    production_repo = MySQLApprovalRepository(conn, PRODUCTION_EXTRAS_TABLE)
    incidents_repo = MySQLIncidentRepository(conn)
    security_repo = MySQLScheduleRepository(conn, SECURITY_TABLES)
    thirdparty_repo = MySQLScheduleRepository(conn, THIRDPARTY_TABLES)
    feedback_repo = MySQLFeedbackRepository(conn)

    return Container(
        conn=conn,
        attendance_dashboard_service=AttendanceDashboardService(
            attendance_repo,
            week_start=week_start,
            row_limit=row_limit,
        ),
        extra_cleaning_service=ApprovalReviewService(RequestKind.EXTRA_CLEANING, cleaning_repo),
        production_service=ApprovalReviewService(RequestKind.PRODUCTION_EXTRAS, production_repo),
        theft_service=TheftReviewService(incidents_repo, week_start=week_start),
        security_schedule_service=ScheduleDashboardService(ScheduleKind.SECURITY, security_repo, week_start=week_start),
        thirdparty_schedule_service=ScheduleDashboardService(
            ScheduleKind.THIRDPARTY,
            thirdparty_repo,
            week_start=week_start,
        ),
        feedback_service=FeedbackDashboardService(feedback_repo, week_start=week_start),
    )
