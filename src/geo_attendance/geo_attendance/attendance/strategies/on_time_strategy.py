from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...core.policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in at or before the grace deadline."""

    def decide_checkin(self, *, now: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
