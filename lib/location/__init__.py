"""
Location library: coordinate models and platform location interfaces

Example usage:
    from lib.location import GeoCoordinate, StaticLocationService

    service = StaticLocationService(GeoCoordinate(52.52, 13.40, "Berlin"))
    position = await service.getLastKnownPosition()
"""

from .interface import GeocoderInterface, LocationServiceInterface, PositionCallback
from .models import Address, GeoCoordinate, LocationRequest
from .static import StaticLocationService

__all__ = [
    "GeoCoordinate",
    "Address",
    "LocationRequest",
    "LocationServiceInterface",
    "GeocoderInterface",
    "PositionCallback",
    "StaticLocationService",
]
