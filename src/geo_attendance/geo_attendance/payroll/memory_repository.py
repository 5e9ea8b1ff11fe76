from __future__ import annotations

import threading
from typing import Optional, Sequence

from .model import SalarySlip
from .repository import SalarySlipRepository


class InMemorySalarySlipRepository(SalarySlipRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._by_key: dict[tuple[int, str], SalarySlip] = {}

    def upsert_slip(self, slip: SalarySlip) -> SalarySlip:
        with self._lock:
            self._by_key[(int(slip.user_id), slip.month)] = slip
        return slip

    def get_for_user_and_month(self, user_id: int, month: str) -> Optional[SalarySlip]:
        with self._lock:
            return self._by_key.get((int(user_id), month))

    def list_slips(self, user_id: Optional[int] = None) -> Sequence[SalarySlip]:
        with self._lock:
            items = [s for s in self._by_key.values() if user_id is None or s.user_id == int(user_id)]
        items.sort(key=lambda s: (s.month, s.user_id), reverse=True)
        return items
