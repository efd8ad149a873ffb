"""
OpenWeatherMap Async Client

This module provides the WeatherClient class for the OpenWeatherMap API v2.5
(current weather and 5 day forecast). The client is a thin typed layer: it
does no caching and raises classified exceptions instead of returning None.
"""

import json
import logging
from typing import Any, Dict, Optional, cast

import httpx

from .exceptions import ApiError, InvalidResponseError, NetworkError, RequestTimeoutError, errorMessageForStatus
from .models import CurrentWeatherResponse, ForecastResponse

logger = logging.getLogger(__name__)


class WeatherClient:
    """
    Async client for OpenWeatherMap API

    The client owns one httpx.AsyncClient for its whole lifetime, call
    close() (or use as async context manager) to release it.

    Example usage:
        client = WeatherClient(apiKey="your_key")
        try:
            data = await client.getCurrentWeather(52.52, 13.40)
            data = await client.getWeatherByCity("Berlin")
        except NetworkError:
            ...  # No connectivity or timeout
        except ApiError as e:
            ...  # API rejected request, see e.code
        finally:
            await client.close()
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        apiKey: str,
        baseUrl: str = BASE_URL,
        requestTimeout: float = 15,
        language: Optional[str] = None,
        session: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize OpenWeatherMap client

        Args:
            apiKey: OpenWeatherMap API key
            baseUrl: API base URL (default: public v2.5 endpoint)
            requestTimeout: HTTP request timeout (seconds)
            language: Optional language for descriptions (e.g. "en", "ru")
            session: Optional preconfigured httpx.AsyncClient
        """
        self.apiKey = apiKey
        self.baseUrl = baseUrl.rstrip("/")
        self.requestTimeout = requestTimeout
        self.language = language
        self._session = session if session is not None else httpx.AsyncClient(timeout=requestTimeout)

    async def __aenter__(self) -> "WeatherClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Release HTTP session"""
        await self._session.aclose()
        logger.debug("WeatherClient closed")

    async def getCurrentWeather(self, lat: float, lon: float) -> CurrentWeatherResponse:
        """
        Get current weather by coordinates

        Uses: https://api.openweathermap.org/data/2.5/weather?lat=..&lon=..

        Raises:
            NetworkError: Connectivity problem or timeout
            ApiError: Non-2xx response
            InvalidResponseError: Response is not valid JSON
        """
        data = await self._makeRequest("weather", {"lat": lat, "lon": lon})
        return cast(CurrentWeatherResponse, data)

    async def getWeatherByCity(self, city: str) -> CurrentWeatherResponse:
        """
        Get current weather by city name

        Uses: https://api.openweathermap.org/data/2.5/weather?q=..

        Args:
            city: City name, optionally with country code ("Berlin,DE")

        Raises:
            NetworkError: Connectivity problem or timeout
            ApiError: Non-2xx response (404 if city is unknown)
            InvalidResponseError: Response is not valid JSON
        """
        data = await self._makeRequest("weather", {"q": city})
        return cast(CurrentWeatherResponse, data)

    async def getForecast(self, lat: float, lon: float) -> ForecastResponse:
        """
        Get 5 day / 3 hour forecast by coordinates

        Uses: https://api.openweathermap.org/data/2.5/forecast?lat=..&lon=..
        """
        data = await self._makeRequest("forecast", {"lat": lat, "lon": lon})
        return cast(ForecastResponse, data)

    async def _makeRequest(self, endpoint: str, params: Dict[str, Any]) -> Any:
        """
        Make HTTP request to OpenWeatherMap API

        Args:
            endpoint: API endpoint ("weather", "forecast")
            params: Query parameters (appid and units are added automatically)

        Returns:
            Parsed JSON response
        """
        url = f"{self.baseUrl}/{endpoint}"
        query = dict(params)
        query["units"] = "metric"
        if self.language:
            query["lang"] = self.language

        logger.debug(f"Making request to {url} with params: {query}")
        query["appid"] = self.apiKey

        try:
            response = await self._session.get(url, params=query, timeout=self.requestTimeout)
        except httpx.TimeoutException as e:
            logger.error(f"Request timeout: {e}")
            raise RequestTimeoutError() from e
        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            raise NetworkError(f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            message = errorMessageForStatus(response.status_code)
            if response.status_code == 404:
                logger.warning(message)
            else:
                logger.error(f"API request failed: {message}")
            raise ApiError(message, response.status_code, response.text)

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise InvalidResponseError(f"Failed to parse JSON response: {e}") from e

        logger.debug(f"API request successful: {response.status_code}")
        return data
