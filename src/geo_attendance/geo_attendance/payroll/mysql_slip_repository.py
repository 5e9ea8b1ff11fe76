from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalarySlip
from .repository import SalarySlipRepository

_SLIP_COLUMNS = (
    "slip_id, user_id, month_key, generated_date, basic_salary, hra, da, bonuses, gross_salary, "
    "deductions, tax, net_salary, present_days, total_days"
)


def _to_slip(row: Dict[str, Any]) -> SalarySlip:
    return SalarySlip(
        slip_id=row["slip_id"],
        user_id=int(row["user_id"]),
        month=row["month_key"],
        generated_date=row["generated_date"],
        basic_salary=int(row["basic_salary"]),
        hra=int(row["hra"]),
        da=int(row["da"]),
        bonuses=int(row["bonuses"]),
        gross_salary=int(row["gross_salary"]),
        deductions=int(row["deductions"]),
        tax=int(row["tax"]),
        net_salary=int(row["net_salary"]),
        present_days=float(row["present_days"]),
        total_days=int(row["total_days"]),
    )


class MySQLSalarySlipRepository(SalarySlipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_slip(self, slip: SalarySlip) -> SalarySlip:
        # UNIQUE(user_id, month_key) turns the insert into a full replacement.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO salary_slips({_SLIP_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    slip_id=VALUES(slip_id), generated_date=VALUES(generated_date),
                    basic_salary=VALUES(basic_salary), hra=VALUES(hra), da=VALUES(da),
                    bonuses=VALUES(bonuses), gross_salary=VALUES(gross_salary),
                    deductions=VALUES(deductions), tax=VALUES(tax), net_salary=VALUES(net_salary),
                    present_days=VALUES(present_days), total_days=VALUES(total_days)
                """,
                (
                    slip.slip_id,
                    int(slip.user_id),
                    slip.month,
                    slip.generated_date,
                    slip.basic_salary,
                    slip.hra,
                    slip.da,
                    slip.bonuses,
                    slip.gross_salary,
                    slip.deductions,
                    slip.tax,
                    slip.net_salary,
                    float(slip.present_days),
                    slip.total_days,
                ),
            )
        return slip

    def get_for_user_and_month(self, user_id: int, month: str) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SLIP_COLUMNS} FROM salary_slips WHERE user_id=%s AND month_key=%s",
                (int(user_id), month),
            )
            row = fetchone(cur)
            return _to_slip(row) if row else None

    def list_slips(self, user_id: Optional[int] = None) -> Sequence[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            if user_id is None:
                cur.execute(f"SELECT {_SLIP_COLUMNS} FROM salary_slips ORDER BY month_key DESC, user_id DESC")
            else:
                cur.execute(
                    f"SELECT {_SLIP_COLUMNS} FROM salary_slips WHERE user_id=%s ORDER BY month_key DESC",
                    (int(user_id),),
                )
            return [_to_slip(r) for r in fetchall(cur)]
