"""
Display helpers for weather snapshots
"""

import datetime
from typing import List, Optional

from lib.openweathermap import WeatherSnapshot


def formatTemperature(temperature: float) -> str:
    """Whole degrees, truncated toward zero: 18.9 -> "18°C" """
    return f"{int(temperature)}°C"


def formatDescription(description: str, temperature: float) -> str:
    """ "clear sky", 18.5 -> "Clear sky, 18°C" """
    if description:
        description = description[0].upper() + description[1:]
    return f"{description}, {formatTemperature(temperature)}"


def formatTimestamp(timestamp: int, utcOffset: int = 0) -> str:
    """
    Format epoch seconds as HH:MM in location local time

    Args:
        timestamp: Unix time (seconds)
        utcOffset: Location UTC offset (seconds), as in WeatherSnapshot.timezone
    """
    tz = datetime.timezone(datetime.timedelta(seconds=utcOffset))
    return datetime.datetime.fromtimestamp(timestamp, tz).strftime("%H:%M")


def formatCoordinateName(latitude: float, longitude: float) -> str:
    """Fallback place name for coordinate without known name"""
    return f"{latitude:.4f}, {longitude:.4f}"


def formatSnapshot(snapshot: WeatherSnapshot, cityName: Optional[str] = None) -> List[str]:
    """
    Multi-line text report for snapshot

    Args:
        snapshot: Weather to show
        cityName: Display name overriding snapshot.cityName (if given)
    """
    name = cityName or snapshot.cityName
    if not name and snapshot.coordinate is not None:
        name = formatCoordinateName(snapshot.coordinate.latitude, snapshot.coordinate.longitude)
    if snapshot.country:
        name = f"{name}, {snapshot.country}"

    ret = [
        f"{name}: {formatDescription(snapshot.description, snapshot.temperature)}",
        f"Feels like {formatTemperature(snapshot.feelsLike)}"
        f" (min {formatTemperature(snapshot.minTemp)}, max {formatTemperature(snapshot.maxTemp)})",
        f"Humidity: {snapshot.humidity}%, Pressure: {snapshot.pressure} hPa, Clouds: {snapshot.cloudiness}%",
        f"Wind: {snapshot.windSpeed} m/s, {snapshot.windDirection}°",
    ]
    if snapshot.icon:
        ret.append(f"Icon: {snapshot.iconUrl}")
    if snapshot.rain is not None:
        ret.append(f"Rain: {snapshot.rain} mm/h")
    if snapshot.snow is not None:
        ret.append(f"Snow: {snapshot.snow} mm/h")
    if snapshot.sunrise and snapshot.sunset:
        ret.append(
            f"Sunrise: {formatTimestamp(snapshot.sunrise, snapshot.timezone)}, "
            f"Sunset: {formatTimestamp(snapshot.sunset, snapshot.timezone)}"
        )
    if snapshot.timestamp:
        ret.append(f"Updated: {formatTimestamp(snapshot.timestamp, snapshot.timezone)}")
    return ret
