from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence
from urllib.parse import quote

from ..common.validators import require_email, require_non_empty, require_non_negative
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, UserNotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use cases around the user directory."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_users()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise UserNotFoundError(f"User {user_id} does not exist")
        return user

    def find_by_email(self, email: str) -> User:
        """Login lookup. Not an authentication mechanism."""
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise UserNotFoundError("No user registered with this email")
        return user

    def create_user(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        role: Role,
        department: str,
        designation: str,
        base_salary: float,
        join_date: Optional[date] = None,
    ) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admin can add employees")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        department = require_non_empty(department, "Department")
        designation = (designation or "").strip()
        base_salary = require_non_negative(base_salary, "Base salary")

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        try:
            user_id = self._users.create_user(
                name=name,
                email=email,
                role=role,
                department=department,
                designation=designation,
                base_salary=base_salary,
                join_date=join_date or date.today(),
                avatar_url=f"https://ui-avatars.com/api/?name={quote(name)}&background=random",
            )
        except DuplicateRecordError as e:
            raise ValidationError("Email is already registered") from e

        logger.info("Created user %s (%s, %s)", user_id, email, role.value)
        return self.get_user(user_id)
