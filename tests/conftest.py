from __future__ import annotations

from datetime import date, datetime

import pytest

from geo_attendance.attendance.memory_repository import InMemoryAttendanceRepository
from geo_attendance.attendance.service import AttendanceService
from geo_attendance.common.datetime_utils import FixedClock
from geo_attendance.core.enums import Role
from geo_attendance.core.policy import AttendancePolicy
from geo_attendance.users.memory_repository import InMemoryUserRepository
from geo_attendance.users.model import User


def make_user(user_id: int, *, role: Role = Role.EMPLOYEE, base_salary: float = 800_000, department: str = "Engineering") -> User:
    return User(
        user_id=user_id,
        name=f"User {user_id}",
        email=f"user{user_id}@techflow.com",
        role=role,
        department=department,
        designation="Developer",
        base_salary=base_salary,
        join_date=date(2023, 1, 1),
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 2, 2, 9, 30, 0))


@pytest.fixture
def users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository(
        [
            make_user(1, role=Role.ADMIN, department="Management"),
            make_user(2),
            make_user(3, department="Marketing"),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def policy() -> AttendancePolicy:
    return AttendancePolicy(office_start_hour=10, late_grace_minutes=15)


@pytest.fixture
def attendance_service(attendance_repo, users_repo, policy, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo, policy=policy, clock=clock)
