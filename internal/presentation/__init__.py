"""
Presentation boundary: observable state and triggers for UI
"""

from .controller import WeatherController
from .formatting import formatCoordinateName, formatDescription, formatSnapshot, formatTemperature, formatTimestamp

__all__ = [
    "WeatherController",
    "formatSnapshot",
    "formatTemperature",
    "formatDescription",
    "formatTimestamp",
    "formatCoordinateName",
]
