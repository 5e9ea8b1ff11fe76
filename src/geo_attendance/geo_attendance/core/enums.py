from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored with each record."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    ON_LEAVE = "On Leave"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
