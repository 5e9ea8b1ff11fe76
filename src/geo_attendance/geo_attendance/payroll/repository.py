from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalarySlip


class SalarySlipRepository(Protocol):
    """At most one current slip per (user_id, month)."""

    def upsert_slip(self, slip: SalarySlip) -> SalarySlip:
        """Store the slip, replacing any slip with the same key."""

        raise NotImplementedError

    def get_for_user_and_month(self, user_id: int, month: str) -> Optional[SalarySlip]:
        raise NotImplementedError

    def list_slips(self, user_id: Optional[int] = None) -> Sequence[SalarySlip]:
        raise NotImplementedError
