from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.report_service import AttendanceReportService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.enums import StorageBackend
from .core.exceptions import ValidationError
from .core.policy import AttendancePolicy, PayrollPolicy
from .database.connection import DatabaseConnection, DBConfig
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.memory_repository import InMemorySalarySlipRepository
from .payroll.mysql_slip_repository import MySQLSalarySlipRepository
from .payroll.repository import SalarySlipRepository
from .payroll.service import PayrollService
from .users.memory_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock

    attendance_policy: AttendancePolicy
    payroll_policy: PayrollPolicy

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    slips_repo: SalarySlipRepository

    user_service: UserService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    payroll_service: PayrollService


def build_container(settings: Any, *, clock: Clock | None = None) -> Container:
    clock = clock or SystemClock()
    attendance_policy = AttendancePolicy.from_settings(settings)
    payroll_policy = PayrollPolicy.from_settings(settings)

    try:
        backend = StorageBackend(str(getattr(settings, "STORAGE_BACKEND", StorageBackend.MYSQL.value)).lower())
    except ValueError:
        raise ValidationError(f"Unknown STORAGE_BACKEND: {getattr(settings, 'STORAGE_BACKEND', None)!r}")

    conn: Optional[DatabaseConnection] = None
    if backend == StorageBackend.MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        users_repo: UserRepository = MySQLUserRepository(conn)
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
        slips_repo: SalarySlipRepository = MySQLSalarySlipRepository(conn)
    else:
        users_repo = InMemoryUserRepository()
        attendance_repo = InMemoryAttendanceRepository()
        slips_repo = InMemorySalarySlipRepository()

    user_service = UserService(users_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        policy=attendance_policy,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(),
    )
    report_service = AttendanceReportService(attendance_repo, users_repo, policy=attendance_policy)
    payroll_service = PayrollService(
        attendance_repo,
        users_repo,
        slips_repo,
        calculator=StandardPayrollCalculator(payroll_policy, now=clock.now),
    )

    return Container(
        conn=conn,
        clock=clock,
        attendance_policy=attendance_policy,
        payroll_policy=payroll_policy,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        slips_repo=slips_repo,
        user_service=user_service,
        attendance_service=attendance_service,
        report_service=report_service,
        payroll_service=payroll_service,
    )
