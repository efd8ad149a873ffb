"""
Types for weather retrieval service
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeAlias

from lib.location import GeoCoordinate

WeatherFetcher: TypeAlias = Callable[[], Awaitable[Any]]
"""Performs single API call and returns decoded JSON"""


@dataclass(frozen=True)
class WeatherEngineConfig:
    """
    Timing constants, dood!

    Attributes:
        cacheTtl: Cached snapshot freshness (seconds)
        locationTimeout: Max wait for a live position fix (seconds)
        refreshInterval: Auto refresh period (seconds)
        requestTimeout: HTTP request timeout (seconds)
    """

    cacheTtl: float = 900
    locationTimeout: float = 30
    refreshInterval: float = 60
    requestTimeout: float = 15


@dataclass(frozen=True)
class WeatherRequest:
    """Everything needed to repeat a fetch for a cache key"""

    key: str
    fetcher: WeatherFetcher
    hint: Optional[GeoCoordinate] = None
    cityName: Optional[str] = None
