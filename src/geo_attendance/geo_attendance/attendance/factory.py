from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.policy import AttendancePolicy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


def is_late(now: datetime, policy: AttendancePolicy) -> bool:
    """Late from the first whole minute after the grace deadline; seconds are ignored."""
    return policy.minutes_late(now) > 0


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, policy: AttendancePolicy) -> AttendanceStrategy:
        if is_late(now, policy):
            return LateStrategy()
        return OnTimeStrategy()
