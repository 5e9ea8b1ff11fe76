from __future__ import annotations

from abc import ABC, abstractmethod

from ...users.model import User
from ..model import SalarySlip


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_slip(self, user: User, month: str, present_days: float) -> SalarySlip:
        raise NotImplementedError
