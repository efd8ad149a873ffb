"""
Geocode Maps API Client Library

This module provides an async reverse geocoding client for the Geocode Maps
API (geocode.maps.co) with type-safe responses and caching support, plus a
GeocoderInterface adapter for location services.

Example usage:
    from lib.geocode_maps import GeocodeMapsClient, GeocodeMapsGeocoder
    from lib.cache import DictCache

    client = GeocodeMapsClient(apiKey="your_api_key", reverseCache=DictCache())
    location = await client.reverse(52.5443, 103.8882)

    geocoder = GeocodeMapsGeocoder(client)
    addresses = await geocoder.getFromLocation(52.5443, 103.8882)
"""

from lib.geocode_maps.client import GeocodeMapsClient, GeocodeMapsGeocoder, addressFromDetails
from lib.geocode_maps.models import AddressDetails, NameDetails, ReverseResponse, ReverseResult

__all__ = [
    "GeocodeMapsClient",
    "GeocodeMapsGeocoder",
    "addressFromDetails",
    "AddressDetails",
    "NameDetails",
    "ReverseResult",
    "ReverseResponse",
]
