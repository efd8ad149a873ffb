"""
Fake OpenWeatherMap backend and sample API responses.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import httpx

# ============================================================================
# Sample Data
# ============================================================================


BERLIN_RESPONSE: Dict[str, Any] = {
    "coord": {"lon": 13.405, "lat": 52.52},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "base": "stations",
    "main": {
        "temp": 18.5,
        "feels_like": 17.9,
        "temp_min": 16.1,
        "temp_max": 20.2,
        "pressure": 1015,
        "humidity": 55,
    },
    "visibility": 10000,
    "wind": {"speed": 3.6, "deg": 240},
    "clouds": {"all": 0},
    "dt": 1697644800,
    "sys": {"country": "DE", "sunrise": 1697607000, "sunset": 1697645000},
    "timezone": 7200,
    "id": 2950159,
    "name": "Berlin",
    "cod": 200,
}

PARIS_RESPONSE: Dict[str, Any] = {
    **BERLIN_RESPONSE,
    "coord": {"lon": 2.3522, "lat": 48.8566},
    "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
    "main": {"temp": 12.0, "feels_like": 11.2, "temp_min": 10.5, "temp_max": 13.1, "pressure": 1009, "humidity": 81},
    "sys": {"country": "FR", "sunrise": 1697609000, "sunset": 1697647000},
    "id": 2988507,
    "name": "Paris",
}

CITIES: Dict[str, Dict[str, Any]] = {"berlin": BERLIN_RESPONSE, "paris": PARIS_RESPONSE}

NOT_FOUND_RESPONSE: Dict[str, Any] = {"cod": "404", "message": "city not found"}

# (status code, JSON body) by query
Route = Tuple[int, Dict[str, Any]]
RouteFunc = Callable[[str, Dict[str, Any]], Route]


class FakeOpenWeatherMap:
    """
    Fake HTTP session answering OpenWeatherMap requests, dood!

    Known cities get their responses, unknown ones 404. Coordinates near
    Paris get PARIS_RESPONSE, any other coordinate BERLIN_RESPONSE.
    Set `offline` to make every request fail with ConnectError.
    """

    def __init__(self, route: Optional[RouteFunc] = None):
        self.route = route or self.defaultRoute
        self.offline = False
        self.requests: List[Dict[str, Any]] = []

        self.session = MagicMock()
        self.session.get = AsyncMock(side_effect=self._get)
        self.session.aclose = AsyncMock()

    @staticmethod
    def defaultRoute(url: str, params: Dict[str, Any]) -> Route:
        if "q" in params:
            response = CITIES.get(params["q"].split(",")[0].strip().lower())
            if response is None:
                return 404, NOT_FOUND_RESPONSE
            return 200, response

        paris = PARIS_RESPONSE["coord"]
        if abs(params["lat"] - paris["lat"]) < 0.5 and abs(params["lon"] - paris["lon"]) < 0.5:
            return 200, PARIS_RESPONSE
        return 200, BERLIN_RESPONSE

    async def _get(self, url: str, params: Dict[str, Any], **kwargs) -> httpx.Response:
        self.requests.append(dict(params))
        request = httpx.Request("GET", url, params=params)
        if self.offline:
            raise httpx.ConnectError("Network is unreachable", request=request)

        statusCode, body = self.route(url, params)
        return httpx.Response(statusCode, json=body, request=request)
