from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS
from ..core.policy import AttendancePolicy


@dataclass(frozen=True)
class Coords:
    lat: float
    lng: float


@dataclass(frozen=True)
class GeoClassification:
    distance_meters: float
    in_zone: bool


def haversine_distance(a: Coords, b: Coords) -> float:
    """Great-circle distance in meters between two coordinates."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def classify(p: Coords, center: Coords, radius_meters: float) -> GeoClassification:
    distance = haversine_distance(p, center)
    return GeoClassification(distance_meters=distance, in_zone=distance <= radius_meters)


@dataclass(frozen=True)
class Geofence:
    """Circular zone around the office."""

    center: Coords
    radius_meters: float

    @classmethod
    def from_policy(cls, policy: AttendancePolicy) -> "Geofence":
        return cls(
            center=Coords(lat=policy.office_lat, lng=policy.office_lng),
            radius_meters=float(policy.geofence_radius_meters),
        )

    def classify(self, p: Coords) -> GeoClassification:
        return classify(p, self.center, self.radius_meters)
