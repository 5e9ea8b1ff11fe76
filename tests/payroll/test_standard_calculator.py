from datetime import date, datetime

import pytest

from geo_attendance.core.enums import Role
from geo_attendance.core.exceptions import ValidationError
from geo_attendance.core.policy import PayrollPolicy
from geo_attendance.payroll.calculator.standard_calculator import StandardPayrollCalculator, round_currency
from geo_attendance.users.model import User

GENERATED = datetime(2026, 3, 1, 12, 0)


def _user(base_salary: float) -> User:
    return User(
        user_id=3,
        name="Priya Sharma",
        email="priya@techflow.com",
        role=Role.EMPLOYEE,
        department="Engineering",
        designation="Frontend Developer",
        base_salary=base_salary,
        join_date=date(2023, 6, 10),
    )


@pytest.fixture
def calc() -> StandardPayrollCalculator:
    return StandardPayrollCalculator(now=lambda: GENERATED)


def test_prorated_slip_below_tds_threshold(calc):
    slip = calc.compute_slip(_user(800_000), "2026-02", 22)

    assert slip.basic_salary == 24444
    assert slip.hra == 19556
    assert slip.da == 4889
    assert slip.bonuses == 0
    assert slip.gross_salary == 48889
    assert slip.tax == 0
    assert slip.deductions == 200
    assert slip.net_salary == 48689
    assert slip.present_days == 22
    assert slip.total_days == 30
    assert slip.month == "2026-02"
    assert slip.generated_date == GENERATED


def test_tds_applies_above_threshold(calc):
    slip = calc.compute_slip(_user(1_200_000), "2026-02", 30)

    assert slip.gross_salary == 100_000
    assert (slip.basic_salary, slip.hra, slip.da) == (50_000, 40_000, 10_000)
    assert slip.tax == 10_000
    assert slip.net_salary == 89_800


def test_tds_threshold_is_exclusive(calc):
    at_threshold = calc.compute_slip(_user(720_000), "2026-02", 25)
    above = calc.compute_slip(_user(720_000), "2026-02", 26)

    assert at_threshold.gross_salary == 50_000
    assert at_threshold.tax == 0
    assert above.tax == 5_200


def test_net_matches_gross_minus_deductions_within_rounding(calc):
    for base, days in [(800_000, 22), (613_337, 17.5), (1_999_999, 29), (450_000, 0)]:
        slip = calc.compute_slip(_user(base), "2026-01", days)
        assert abs(slip.net_salary - (slip.gross_salary - slip.tax - slip.deductions)) <= 1


def test_no_attendance_still_charges_professional_tax(calc):
    slip = calc.compute_slip(_user(800_000), "2026-02", 0)

    assert slip.gross_salary == 0
    assert slip.net_salary == -200


def test_same_inputs_same_figures(calc):
    a = calc.compute_slip(_user(800_000), "2026-02", 22)
    b = calc.compute_slip(_user(800_000), "2026-02", 22)

    assert a.slip_id != b.slip_id
    assert (a.basic_salary, a.hra, a.da, a.gross_salary, a.tax, a.net_salary) == (
        b.basic_salary,
        b.hra,
        b.da,
        b.gross_salary,
        b.tax,
        b.net_salary,
    )


def test_policy_drives_the_split():
    calc = StandardPayrollCalculator(
        PayrollPolicy(days_per_month=20, professional_tax=0, basic_pct=0.6, hra_pct=0.3, da_pct=0.1),
        now=lambda: GENERATED,
    )

    slip = calc.compute_slip(_user(240_000), "2026-02", 20)

    assert (slip.basic_salary, slip.hra, slip.da) == (12_000, 6_000, 2_000)
    assert slip.net_salary == 20_000
    assert slip.total_days == 20


@pytest.mark.parametrize("month, days", [("2026-13", 1), ("Feb 2026", 1), ("2026-02", -1)])
def test_rejects_bad_input(calc, month, days):
    with pytest.raises(ValidationError):
        calc.compute_slip(_user(800_000), month, days)


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (48688.49, 48688), (-0.4, 0)])
def test_round_currency_half_up(value, expected):
    assert round_currency(value) == expected
