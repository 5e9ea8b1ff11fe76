from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for the user directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def list_users(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError
