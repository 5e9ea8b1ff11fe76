from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a directory entry.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    name: str
    email: str
    role: Role
    department: str
    designation: str
    base_salary: float
    join_date: date
    avatar_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
