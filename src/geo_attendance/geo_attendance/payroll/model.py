from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SalarySlip:
    """Payslip for one user and one YYYY-MM month. Amounts are whole currency units."""

    slip_id: str
    user_id: int
    month: str
    generated_date: datetime
    basic_salary: int
    hra: int
    da: int
    bonuses: int
    gross_salary: int
    deductions: int
    tax: int
    net_salary: int
    present_days: float
    total_days: int
