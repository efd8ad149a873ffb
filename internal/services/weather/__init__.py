"""
Weather service: cache-aware weather retrieval
"""

from .service import WeatherRetrievalEngine, makeCityKey, makeCoordinateKey, normalizeCityName
from .types import WeatherEngineConfig, WeatherRequest

__all__ = [
    "WeatherRetrievalEngine",
    "WeatherEngineConfig",
    "WeatherRequest",
    "makeCoordinateKey",
    "makeCityKey",
    "normalizeCityName",
]
