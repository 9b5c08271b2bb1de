from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mongo_auth_provider import MongoAuthProvider
from .accounts.provider import AuthProvider
from .accounts.service import AccountService, AuthService
from .attendance.mongo_attendance_repository import MongoAttendanceLogRepository, MongoAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .database.connection import DatabaseConnection, MongoConfig
from .database.feed import ChangeFeed
from .employees.mongo_employee_repository import MongoEmployeeRepository
from .employees.service import EmployeeService
from .jobs.mongo_job_repository import MongoJobRepository
from .jobs.service import JobService
from .leave.mongo_leave_repository import MongoLeaveRepository
from .leave.service import LeaveService
from .notifications.leave_notifier import LeaveNotifier
from .notifications.mailer import MailConfig, build_mailer
from .payroll.mongo_payroll_repository import MongoPayrollRepository
from .payroll.service import PayrollService
from .settings.mongo_settings_repository import (
    MongoHolidayRepository,
    MongoReferenceListRepository,
    MongoSettingsRepository,
)
from .settings.service import SettingsService
from .system_log.mongo_system_log_repository import MongoSystemLogRepository
from .system_log.service import SystemLogService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    feed: ChangeFeed
    auth_provider: AuthProvider

    system_log_service: SystemLogService
    auth_service: AuthService
    account_service: AccountService
    employee_service: EmployeeService
    settings_service: SettingsService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    job_service: JobService


def build_container(
    *,
    mongo_config: dict,
    base_url: str,
    mail_config: Optional[dict] = None,
    clock: Clock = now_local,
) -> Container:
    config = MongoConfig(
        uri=str(mongo_config.get("uri", "mongodb://localhost:27017")),
        database=str(mongo_config.get("database", "hr_assistant")),
    )
    conn = DatabaseConnection.get_instance(config)
    feed = ChangeFeed()

    employees_repo = MongoEmployeeRepository(conn, feed)
    attendance_repo = MongoAttendanceRepository(conn, feed)
    attendance_log_repo = MongoAttendanceLogRepository(conn)
    leave_repo = MongoLeaveRepository(conn, feed)
    payroll_repo = MongoPayrollRepository(conn, feed)
    system_log_repo = MongoSystemLogRepository(conn, feed)
    auth_provider = MongoAuthProvider(conn, clock=clock)

    audit = SystemLogService(system_log_repo, clock=clock)
    settings_service = SettingsService(
        MongoSettingsRepository(conn),
        MongoHolidayRepository(conn, feed),
        MongoReferenceListRepository(conn),
        employees_repo,
        attendance_log_repo,
        audit,
        clock=clock,
    )
    notifier = LeaveNotifier(build_mailer(MailConfig.from_settings(mail_config)), base_url)

    return Container(
        conn=conn,
        feed=feed,
        auth_provider=auth_provider,
        system_log_service=audit,
        auth_service=AuthService(auth_provider, employees_repo),
        account_service=AccountService(auth_provider, employees_repo, audit),
        employee_service=EmployeeService(employees_repo, auth_provider, audit, clock=clock),
        settings_service=settings_service,
        attendance_service=AttendanceService(attendance_repo, attendance_log_repo, employees_repo, clock=clock),
        leave_service=LeaveService(
            leave_repo, employees_repo, settings_service, notifier, audit, feed=feed, clock=clock
        ),
        payroll_service=PayrollService(
            payroll_repo, attendance_repo, leave_repo, employees_repo, audit, clock=clock
        ),
        job_service=JobService(MongoJobRepository(conn), audit, clock=clock),
    )
