"""
OpenWeatherMap Async Client Library

This module provides an async client for the OpenWeatherMap API v2.5 and
the parser turning its current weather responses into WeatherSnapshot.

Example usage:
    from lib.openweathermap import WeatherClient, parseCurrentWeather

    async with WeatherClient(apiKey="your_api_key") as client:
        data = await client.getWeatherByCity("Berlin")
        snapshot = parseCurrentWeather(data)
        print(f"Temperature: {snapshot.temperature}°C")
"""

from .client import WeatherClient
from .exceptions import (
    ApiError,
    InvalidResponseError,
    NetworkError,
    OpenWeatherMapError,
    RequestTimeoutError,
    errorMessageForStatus,
)
from .models import CurrentWeatherResponse, ForecastResponse, WeatherSnapshot
from .parser import extractCoordinate, parseCurrentWeather

__all__ = [
    "WeatherClient",
    "WeatherSnapshot",
    "CurrentWeatherResponse",
    "ForecastResponse",
    "parseCurrentWeather",
    "extractCoordinate",
    "OpenWeatherMapError",
    "NetworkError",
    "RequestTimeoutError",
    "ApiError",
    "InvalidResponseError",
    "errorMessageForStatus",
]
