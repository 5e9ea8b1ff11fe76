from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from .classifier import Coords


class GeoSource(Protocol):
    """Supplies the caller's position.

    Returns None when no position is available (permission denied, timeout).
    """

    def current_position(self) -> Optional[Coords]:
        raise NotImplementedError


@dataclass(frozen=True)
class StaticGeoSource:
    """A single reading already obtained by the client (e.g. posted with a request)."""

    position: Optional[Coords]

    def current_position(self) -> Optional[Coords]:
        return self.position

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "StaticGeoSource":
        payload = payload or {}
        try:
            lat = float(payload["lat"])
            lng = float(payload["lng"])
        except (KeyError, TypeError, ValueError):
            return cls(position=None)
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return cls(position=None)
        return cls(position=Coords(lat=lat, lng=lng))
