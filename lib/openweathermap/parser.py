"""
Parser for OpenWeatherMap current weather responses

Required: "main" object with "temp" and non-empty "weather" array.
Everything else is optional and defaults to 0 / "" (rain and snow to None).
"""

import logging
from typing import Any, Dict, Optional

import lib.utils as utils
from lib.location.models import GeoCoordinate

from .exceptions import InvalidResponseError
from .models import WeatherSnapshot

logger = logging.getLogger(__name__)


def _getObject(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Get optional nested object, {} if absent or not an object"""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _getPrecipitation(data: Dict[str, Any], key: str) -> Optional[float]:
    block = data.get(key)
    if isinstance(block, dict) and block.get("1h") is not None:
        return float(block["1h"])
    return None


def extractCoordinate(data: Dict[str, Any], hint: Optional[GeoCoordinate] = None) -> Optional[GeoCoordinate]:
    """
    Get coordinate from response, falling back to hint

    Args:
        data: Decoded API response
        hint: Coordinate the request was made for (if any)

    Returns:
        Coordinate echoed by API (named after response city), hint or None
    """
    coord = _getObject(data, "coord")
    if "lat" in coord and "lon" in coord:
        name = data.get("name") or (hint.name if hint is not None else None)
        return GeoCoordinate(float(coord["lat"]), float(coord["lon"]), name)
    return hint


def parseCurrentWeather(data: Any, hint: Optional[GeoCoordinate] = None) -> WeatherSnapshot:
    """
    Parse /weather response into WeatherSnapshot

    Args:
        data: Decoded JSON response
        hint: Coordinate used for the request, used if response has no "coord"

    Returns:
        WeatherSnapshot

    Raises:
        InvalidResponseError: If required blocks are missing or malformed
    """
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected JSON object, got {type(data).__name__}")

    main = data.get("main")
    if not isinstance(main, dict) or main.get("temp") is None:
        raise InvalidResponseError("Response has no 'main' block")

    weatherList = data.get("weather")
    if not isinstance(weatherList, list) or not weatherList or not isinstance(weatherList[0], dict):
        raise InvalidResponseError("Response has no 'weather' description")
    weather = weatherList[0]

    wind = _getObject(data, "wind")
    clouds = _getObject(data, "clouds")
    sysBlock = _getObject(data, "sys")

    try:
        return WeatherSnapshot(
            cityName=str(data.get("name", "")),
            country=str(sysBlock.get("country", "")),
            coordinate=extractCoordinate(data, hint),
            temperature=float(main["temp"]),
            feelsLike=float(main.get("feels_like", 0)),
            minTemp=float(main.get("temp_min", 0)),
            maxTemp=float(main.get("temp_max", 0)),
            humidity=int(main.get("humidity", 0)),
            pressure=int(main.get("pressure", 0)),
            windSpeed=float(wind.get("speed", 0)),
            windDirection=int(wind.get("deg", 0)),
            description=str(weather.get("description", "")),
            icon=str(weather.get("icon", "")),
            cloudiness=int(clouds.get("all", 0)),
            sunrise=int(sysBlock.get("sunrise", 0)),
            sunset=int(sysBlock.get("sunset", 0)),
            timezone=int(data.get("timezone", 0)),
            timestamp=int(data.get("dt", 0)),
            rain=_getPrecipitation(data, "rain"),
            snow=_getPrecipitation(data, "snow"),
            rawData=utils.jsonDumps(data),
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Malformed weather response: {e}")
        raise InvalidResponseError(f"Malformed weather response: {e}") from e
