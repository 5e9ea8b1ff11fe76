from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

from ..core.exceptions import ValidationError


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current local time."""

    def now(self) -> datetime:
        return datetime.now()


@dataclass
class FixedClock:
    """Clock pinned to a given instant; `advance` moves it forward."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def to_local_naive(value: datetime) -> datetime:
    """Stored times are naive local time; aware values are converted to it."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_iso_datetime(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid timestamp (ISO 8601): {value!r}")
    return to_local_naive(parsed)


def parse_month_key(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM month key into (year, month)."""
    try:
        d = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return d.year, d.month


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def month_bounds(value: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    year, month = parse_month_key(value)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def format_clock_time(value: datetime | None) -> str:
    return value.strftime("%H:%M:%S") if value else "N/A"
