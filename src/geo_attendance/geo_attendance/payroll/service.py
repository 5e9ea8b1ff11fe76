from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_month_key
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, UserNotFoundError
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalarySlip
from .repository import SalarySlipRepository

logger = logging.getLogger(__name__)

# Share of a day each status contributes to the present-day count.
DAY_WEIGHTS: dict[AttendanceStatus, float] = {
    AttendanceStatus.PRESENT: 1.0,
    AttendanceStatus.LATE: 1.0,
    AttendanceStatus.HALF_DAY: 0.5,
    AttendanceStatus.ABSENT: 0.0,
    AttendanceStatus.ON_LEAVE: 0.0,
}


class PayrollService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        slips: SalarySlipRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._slips = slips
        self._calculator = calculator or StandardPayrollCalculator()

    def count_present_days(self, user_id: int, month: str) -> float:
        parse_month_key(month)
        records = self._attendance.list_by_user_and_month(user_id, month)
        return sum(DAY_WEIGHTS.get(r.status, 0.0) for r in records)

    def preview_slip(self, *, current_role: Role, user_id: int, month: str) -> SalarySlip:
        """Compute a slip without saving it."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admin can generate salary slips")

        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} does not exist")

        present_days = self.count_present_days(user.user_id, month)
        return self._calculator.compute_slip(user, month, present_days)

    def generate_slip(self, *, current_role: Role, user_id: int, month: str) -> SalarySlip:
        slip = self.preview_slip(current_role=current_role, user_id=user_id, month=month)
        return self.upsert_slip(slip)

    def upsert_slip(self, slip: SalarySlip) -> SalarySlip:
        replaced = self._slips.get_for_user_and_month(slip.user_id, slip.month)
        saved = self._slips.upsert_slip(slip)
        logger.info(
            "Salary slip %s for user %s (%s): net %s%s",
            saved.slip_id,
            saved.user_id,
            saved.month,
            saved.net_salary,
            f", replaces {replaced.slip_id}" if replaced else "",
        )
        return saved

    def get_slip(self, user_id: int, month: str) -> Optional[SalarySlip]:
        return self._slips.get_for_user_and_month(user_id, month)

    def list_slips(self, user_id: Optional[int] = None) -> Sequence[SalarySlip]:
        return self._slips.list_slips(user_id)
