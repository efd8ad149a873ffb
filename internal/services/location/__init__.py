"""
Location service: current position and place name resolution
"""

from .service import DEFAULT_LIVE_REQUEST, DEFAULT_TRACKING_REQUEST, LocationListener, LocationProvider
from .types import LocationState

__all__ = [
    "LocationProvider",
    "LocationState",
    "LocationListener",
    "DEFAULT_LIVE_REQUEST",
    "DEFAULT_TRACKING_REQUEST",
]
