from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable
from uuid import uuid4

from ...common.datetime_utils import parse_month_key
from ...core.exceptions import ValidationError
from ...core.policy import PayrollPolicy
from ...users.model import User
from ..model import SalarySlip
from .base import PayrollCalculator


def round_currency(value: float) -> int:
    """Round half up to a whole currency unit."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StandardPayrollCalculator(PayrollCalculator):
    """Pro-rated salary split into basic/HRA/DA with professional tax and TDS.

    The month is always `days_per_month` long for pro-ration, whatever the
    calendar says. Only `slip_id` and `generated_date` differ between two calls
    with the same inputs.
    """

    def __init__(self, policy: PayrollPolicy | None = None, *, now: Callable[[], datetime] = datetime.now):
        self._policy = policy or PayrollPolicy()
        self._now = now

    @property
    def policy(self) -> PayrollPolicy:
        return self._policy

    def compute_slip(self, user: User, month: str, present_days: float) -> SalarySlip:
        parse_month_key(month)
        if present_days < 0:
            raise ValidationError("present_days must be >= 0")

        p = self._policy
        total_days = int(p.days_per_month)
        daily_rate = (float(user.base_salary) / 12) / total_days
        basic_earned = daily_rate * present_days

        basic = basic_earned * p.basic_pct
        hra = basic_earned * p.hra_pct
        da = basic_earned * p.da_pct
        bonuses = 0.0
        gross = basic + hra + da + bonuses

        professional_tax = float(p.professional_tax)
        tds = gross * p.tds_rate if gross > p.tds_threshold else 0.0
        net = gross - (professional_tax + tds)

        return SalarySlip(
            slip_id=f"slip-{user.user_id}-{month}-{uuid4().hex[:8]}",
            user_id=user.user_id,
            month=month,
            generated_date=self._now(),
            basic_salary=round_currency(basic),
            hra=round_currency(hra),
            da=round_currency(da),
            bonuses=round_currency(bonuses),
            gross_salary=round_currency(gross),
            deductions=round_currency(professional_tax),
            tax=round_currency(tds),
            net_salary=round_currency(net),
            present_days=present_days,
            total_days=total_days,
        )
