from __future__ import annotations

import threading
from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateRecordError
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Sequence[User] = ()):
        self._lock = threading.RLock()
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    def list_users(self) -> Sequence[User]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda u: u.user_id)

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        with self._lock:
            return next((u for u in self._by_id.values() if u.email.lower() == email), None)

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
        with self._lock:
            if self.get_by_email(email):
                raise DuplicateRecordError(f"User with email {email} already exists")
            user_id = self._next_id
            self._next_id += 1
            self._by_id[user_id] = User(
                user_id=user_id,
                name=name,
                email=email,
                role=role,
                department=department,
                designation=designation,
                base_salary=float(base_salary),
                join_date=join_date,
                avatar_url=avatar_url,
            )
            return user_id
