"""
Geocode Maps API Data Models

This module defines TypedDict data models for the Geocode Maps /reverse
endpoint responses (jsonv2 format).
"""

import sys
from typing import List, NotRequired

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict


class AddressDetails(TypedDict, total=False, closed=False):
    """Structured address components from geocoding response, dood!

    All fields are optional as different locations have different address structures.
    """

    road: str  # Street name
    neighbourhood: str  # Neighbourhood/district
    suburb: str  # Suburb name
    hamlet: str  # Hamlet name
    village: str  # Village name
    town: str  # Town name
    city: str  # City name
    county: str  # County/district name
    state: str  # State/region name
    postcode: str  # Postal code
    country: str  # Country name
    country_code: str  # ISO country code (e.g., "ru")


class NameDetails(TypedDict, total=False, closed=False):
    """Name translations in different languages, dood!"""

    name: str  # Default name
    int_name: str  # International name


class ReverseResult(TypedDict):
    """Result from /reverse endpoint, dood!"""

    place_id: int  # Unique place identifier
    licence: str  # Data licence information
    osm_type: str  # OSM object type
    osm_id: int  # OSM object ID
    lat: str  # Latitude (string in API response)
    lon: str  # Longitude (string in API response)
    category: str  # Place category
    type: str  # Place type
    place_rank: int  # Place importance rank
    importance: float  # Importance score
    addresstype: str  # Address type
    name: str  # Place name
    display_name: str  # Full display name
    address: AddressDetails  # Structured address components
    boundingbox: List[str]  # Bounding box
    namedetails: NotRequired[NameDetails]  # Optional name translations


# /reverse returns single object
ReverseResponse = ReverseResult
