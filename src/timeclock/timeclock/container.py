from __future__ import annotations

from dataclasses import dataclass

from .activity.mysql_activity_repository import MySQLActivityRepository
from .activity.service import ActivityService
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLAttendanceEventRepository
from .events.service import AttendanceEventService
from .reconciliation.calculator.standard_calculator import StandardWorkedTimeCalculator
from .reports.service import AttendanceReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import ApprovalService
from .shifts.mysql_shift_repository import MySQLShiftTemplateRepository
from .shifts.service import ShiftTemplateService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    events_repo: MySQLAttendanceEventRepository
    templates_repo: MySQLShiftTemplateRepository
    requests_repo: MySQLRequestRepository
    activity_repo: MySQLActivityRepository

    event_service: AttendanceEventService
    shift_template_service: ShiftTemplateService
    report_service: AttendanceReportService
    approval_service: ApprovalService
    activity_service: ActivityService


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    events_repo = MySQLAttendanceEventRepository(conn)
    templates_repo = MySQLShiftTemplateRepository(conn)
    requests_repo = MySQLRequestRepository(conn)
    activity_repo = MySQLActivityRepository(conn)

    event_service = AttendanceEventService(events_repo, timezone=timezone, history_limit=history_limit)
    shift_template_service = ShiftTemplateService(templates_repo)
    report_service = AttendanceReportService(
        events_repo,
        templates_repo,
        calculator=StandardWorkedTimeCalculator(),
        history=event_service,
    )
    approval_service = ApprovalService(requests_repo)
    activity_service = ActivityService(activity_repo, timezone=timezone)

    return Container(
        conn=conn,
        events_repo=events_repo,
        templates_repo=templates_repo,
        requests_repo=requests_repo,
        activity_repo=activity_repo,
        event_service=event_service,
        shift_template_service=shift_template_service,
        report_service=report_service,
        approval_service=approval_service,
        activity_service=activity_service,
    )
