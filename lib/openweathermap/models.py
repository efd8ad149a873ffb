"""
Data models for OpenWeatherMap API client

TypedDict classes describe the parts of the API v2.5 responses the parser
relies on, WeatherSnapshot is the immutable parsed result.
"""

import sys
from dataclasses import dataclass, field
from typing import List, NotRequired, Optional

from lib.location.models import GeoCoordinate

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

# API Response Models
# https://openweathermap.org/current#fields_json


class MainBlock(TypedDict, total=False):
    temp: float  # Temperature (Celsius)
    feels_like: float  # Feels like temperature (Celsius)
    temp_min: float  # Min temperature (Celsius)
    temp_max: float  # Max temperature (Celsius)
    pressure: int  # Atmospheric pressure (hPa)
    humidity: int  # Humidity percentage


class WindBlock(TypedDict, total=False):
    speed: float  # Wind speed (m/s)
    deg: int  # Wind direction (degrees)


class WeatherCondition(TypedDict, total=False):
    id: int  # Weather condition ID
    main: str  # Weather group (Rain, Snow, Clear, etc.)
    description: str  # Weather description
    icon: str  # Icon code (e.g. "01d")


class SysBlock(TypedDict, total=False):
    country: str  # Country code (e.g., "DE")
    sunrise: int  # Sunrise time (Unix timestamp)
    sunset: int  # Sunset time (Unix timestamp)


class CoordBlock(TypedDict):
    lat: float
    lon: float


class CurrentWeatherResponse(TypedDict):
    """Response of /weather endpoint"""

    main: MainBlock
    weather: List[WeatherCondition]
    wind: NotRequired[WindBlock]
    clouds: NotRequired[dict]  # {"all": <cloudiness %>}
    sys: NotRequired[SysBlock]
    coord: NotRequired[CoordBlock]
    rain: NotRequired[dict]  # {"1h": <mm>}
    snow: NotRequired[dict]  # {"1h": <mm>}
    name: NotRequired[str]
    timezone: NotRequired[int]  # Shift in seconds from UTC
    dt: NotRequired[int]  # Observation time (Unix timestamp)


class ForecastItem(TypedDict, total=False):
    dt: int
    main: MainBlock
    weather: List[WeatherCondition]
    wind: WindBlock
    pop: float  # Probability of precipitation (0-1)
    dt_txt: str


class ForecastResponse(TypedDict, total=False):
    """Response of /forecast endpoint (5 day / 3 hour)"""

    cnt: int
    list: List[ForecastItem]
    city: dict


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current weather at a place. Immutable once constructed.

    rawData keeps the source payload for diagnostics only and does not take
    part in equality.
    """

    cityName: str
    country: str
    coordinate: Optional[GeoCoordinate]

    temperature: float  # Celsius
    feelsLike: float  # Celsius
    minTemp: float  # Celsius
    maxTemp: float  # Celsius
    humidity: int  # %
    pressure: int  # hPa

    windSpeed: float  # m/s
    windDirection: int  # degrees

    description: str
    icon: str
    cloudiness: int  # %

    sunrise: int  # Unix timestamp
    sunset: int  # Unix timestamp
    timezone: int  # UTC offset, seconds
    timestamp: int  # Observation time, Unix timestamp

    rain: Optional[float] = None  # Last hour volume, mm
    snow: Optional[float] = None  # Last hour volume, mm
    rawData: str = field(default="", compare=False, repr=False)

    @property
    def iconUrl(self) -> str:
        """URL of weather icon image"""
        return ICON_URL_TEMPLATE.format(icon=self.icon)
