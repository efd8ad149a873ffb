"""
Geocode Maps API Async Client

This module provides the GeocodeMapsClient class for reverse geocoding with
the Geocode Maps API (geocode.maps.co), and GeocodeMapsGeocoder adapting it
to the GeocoderInterface used by location services.
"""

import json
import logging
from typing import Any, Dict, List, Optional, cast

import httpx

from lib.cache import CacheInterface, NullCache
from lib.location import Address, GeocoderInterface

from .models import AddressDetails, ReverseResponse

logger = logging.getLogger(__name__)


class GeocodeMapsClient:
    """Async client for Geocode Maps API with caching, dood!

    Creates new HTTP session for each request to support proper concurrent
    operations.

    Example:
        >>> from lib.geocode_maps import GeocodeMapsClient
        >>> from lib.cache import DictCache
        >>>
        >>> client = GeocodeMapsClient(
        ...     apiKey="your_api_key",
        ...     reverseCache=DictCache(),
        ...     reverseTTL=2592000,     # 30 days
        ...     acceptLanguage="en"
        ... )
        >>> location = await client.reverse(52.5443, 103.8882)
    """

    API_BASE_URL = "https://geocode.maps.co"

    def __init__(
        self,
        apiKey: str,
        reverseCache: Optional[CacheInterface[ReverseResponse]] = None,
        reverseTTL: Optional[int] = 2592000,  # 30 days (geocoding rarely changes)
        requestTimeout: int = 10,
        acceptLanguage: Optional[str] = None,
        baseUrl: str = API_BASE_URL,
    ):
        """Initialize Geocode Maps client, dood!

        Args:
            apiKey: Geocode Maps API key (required)
            reverseCache: Cache for reverse geocoding results (default: NullCache)
            reverseTTL: Cache TTL for reverse results in seconds (default: 30 days)
            requestTimeout: HTTP request timeout in seconds (default: 10)
            acceptLanguage: Optional language for results (e.g., "en", "ru", "fr") (default: None)
            baseUrl: API base URL (default: public endpoint)
        """
        self.apiKey = apiKey
        self.reverseCache: CacheInterface[ReverseResponse] = reverseCache if reverseCache is not None else NullCache()
        self.reverseTTL = reverseTTL
        self.requestTimeout = requestTimeout
        self.acceptLanguage = acceptLanguage
        self.baseUrl = baseUrl.rstrip("/")

    @staticmethod
    def makeReverseCacheKey(lat: float, lon: float, zoom: Optional[int] = None) -> str:
        """Build cache key, coordinates are rounded to 4 decimal places (~11m precision)"""
        return f"reverse:{lat:.4f}:{lon:.4f}:{zoom}"

    async def reverse(
        self,
        lat: float,
        lon: float,
        *,
        zoom: Optional[int] = None,
        namedetails: bool = False,
        acceptLanguage: Optional[str] = None,
    ) -> Optional[ReverseResponse]:
        """Reverse geocoding: convert coordinates to address, dood!

        Finds the nearest OSM object to the given coordinates and returns
        its address and metadata.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            zoom: Detail level (3-18, higher = more detailed)
            namedetails: Include name translations (default: False)
            acceptLanguage: Optional language for results (e.g., "en", "ru", "fr") (default: None)

        Returns:
            Reverse geocoding result or None if error occurs

        Example:
            >>> location = await client.reverse(52.5443, 103.8882)
            >>> if location:
            ...     print(f"Address: {location['display_name']}")
            ...     print(f"City: {location['address'].get('city', 'N/A')}")
        """
        cacheKey = self.makeReverseCacheKey(lat, lon, zoom)

        # Check cache first
        try:
            cachedData = await self.reverseCache.get(cacheKey, self.reverseTTL)
            if cachedData:
                logger.debug(f"Cache hit for reverse: {cacheKey}")
                return cachedData
        except Exception as e:
            logger.warning(f"Cache error for reverse {cacheKey}: {e}")

        params: Dict[str, Any] = {
            "lat": lat,  # Use original coordinates for API call
            "lon": lon,
            "addressdetails": 1,
            "namedetails": 1 if namedetails else 0,
        }
        if zoom is not None:
            params["zoom"] = zoom
        if acceptLanguage:
            params["accept-language"] = acceptLanguage

        result = await self._makeRequest("reverse", params)
        if result is None:
            return None

        reverseResult = cast(ReverseResponse, result)

        try:
            await self.reverseCache.set(cacheKey, reverseResult)
        except Exception as e:
            logger.warning(f"Cache set error for reverse {cacheKey}: {e}")

        return reverseResult

    async def _makeRequest(
        self,
        endpoint: str,
        params: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Make HTTP request to Geocode Maps API, dood!

        Args:
            endpoint: API endpoint path (e.g., "reverse")
            params: Query parameters (api_key and format added automatically)

        Returns:
            Parsed JSON response or None on error

        Error Handling:
            - 401: Invalid API key (logs error, returns None)
            - 404: Location not found (logs warning, returns None)
            - 429: Rate limit exceeded (logs error, returns None)
            - 5xx: Server error (logs error, returns None)
            - Timeout / network / invalid JSON: logs error, returns None
        """
        url = f"{self.baseUrl}/{endpoint}"
        params["format"] = "jsonv2"
        if self.acceptLanguage and "accept-language" not in params:
            params["accept-language"] = self.acceptLanguage

        logger.debug(f"Making request to {url} with params: {params}")
        params["api_key"] = self.apiKey

        try:
            # Create new session for each request
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(url, params=params)

                if response.status_code == 200:
                    data = response.json()
                    logger.debug(f"API request successful: {response.status_code}")
                    return data

                elif response.status_code == 401:
                    logger.error("Invalid API key")
                elif response.status_code == 404:
                    logger.warning("Location not found")
                elif response.status_code == 429:
                    logger.error("Rate limit exceeded")
                elif response.status_code >= 500:
                    logger.error(f"Server error: {response.status_code}")
                else:
                    logger.error(f"API request failed: {response.status_code}")
                    logger.error(f"Response text: {response.text}")
                return None

        except httpx.TimeoutException:
            logger.error("Request timeout")
            return None

        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            return None

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            return None


def addressFromDetails(details: AddressDetails) -> Address:
    """Map OSM address components onto platform geocoder address fields"""

    def firstOf(*keys: str) -> Optional[str]:
        for key in keys:
            value = details.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None

    countryCode = firstOf("country_code")
    return Address(
        locality=firstOf("city", "town", "village", "hamlet"),
        subAdminArea=firstOf("county"),
        adminArea=firstOf("state"),
        subLocality=firstOf("suburb", "neighbourhood"),
        countryCode=countryCode.upper() if countryCode else None,
    )


class GeocodeMapsGeocoder(GeocoderInterface):
    """GeocoderInterface backed by GeocodeMapsClient.reverse(), dood!

    /reverse yields at most one candidate, so maxResults only matters when 0.
    """

    def __init__(self, client: GeocodeMapsClient):
        self.client = client

    async def getFromLocation(self, latitude: float, longitude: float, maxResults: int = 1) -> List[Address]:
        if maxResults < 1:
            return []

        result = await self.client.reverse(latitude, longitude)
        if not result:
            return []

        details = result.get("address")
        if not isinstance(details, dict):
            logger.warning(f"Reverse geocoding result for {latitude}, {longitude} has no address")
            return []

        return [addressFromDetails(details)]
