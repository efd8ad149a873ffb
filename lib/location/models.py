"""
Data models for location library

GeoCoordinate is the identity of a place: two coordinates are the same entity
iff latitude and longitude match exactly. The display name is metadata only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GeoCoordinate:
    """Geographic point, dood!

    Equality and hashing use (latitude, longitude) only:
        >>> GeoCoordinate(1.0, 2.0, "A") == GeoCoordinate(1.0, 2.0, "B")
        True
    """

    latitude: float
    longitude: float
    name: Optional[str] = field(default=None, compare=False, hash=False)

    def __str__(self) -> str:
        ret = f"Latitude: {self.latitude}, Longitude: {self.longitude}"
        if self.name:
            ret += f", Name: {self.name}"
        return ret


@dataclass(frozen=True)
class Address:
    """Candidate address returned by reverse geocoding.

    Field names follow platform geocoder conventions:
    locality is a city/town, subAdminArea a county/district,
    adminArea a state/region and subLocality a suburb/neighbourhood.
    """

    locality: Optional[str] = None
    subAdminArea: Optional[str] = None
    adminArea: Optional[str] = None
    subLocality: Optional[str] = None
    countryCode: Optional[str] = None


@dataclass(frozen=True)
class LocationRequest:
    """Parameters for subscribing to live position updates"""

    highAccuracy: bool = True
    intervalSeconds: float = 10.0  # Desired update interval
    minUpdateIntervalSeconds: float = 5.0  # Fastest accepted update interval
    minDistanceMeters: float = 0.0
