from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...core.policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, late_by_minutes=max(policy.minutes_late(now), 0))
