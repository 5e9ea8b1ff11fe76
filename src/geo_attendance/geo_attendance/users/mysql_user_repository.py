from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, role, department, designation, base_salary, join_date, avatar_url"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        department=row.get("department") or "",
        designation=row.get("designation") or "",
        base_salary=float(row.get("base_salary") or 0),
        join_date=row["join_date"],
        avatar_url=row.get("avatar_url"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_users(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", ((email or "").strip().lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        role: Role,
        department: str,
        designation: str,
        base_salary: float,
        join_date: date,
        avatar_url: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, role, department, designation, base_salary, join_date, avatar_url)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, role.value, department, designation, float(base_salary), join_date, avatar_url),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError(f"User with email {email} already exists") from e
            raise
