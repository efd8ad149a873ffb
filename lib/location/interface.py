"""
Abstract interfaces for platform location services

Implementations wrap whatever positioning and geocoding backends are
available (GPS daemon, static configuration, HTTP geocoders, ...).
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, TypeAlias

from .models import Address, GeoCoordinate, LocationRequest

PositionCallback: TypeAlias = Callable[[GeoCoordinate], None]
"""Receives position fixes. May be invoked from any thread."""


class LocationServiceInterface(ABC):
    """Abstract positioning service"""

    @abstractmethod
    async def getLastKnownPosition(self) -> Optional[GeoCoordinate]:
        """
        Get last known position without waiting for a new fix

        Returns:
            Last known coordinate or None if no position is cached

        Raises:
            PermissionError: If location access is not granted
        """
        pass

    @abstractmethod
    def requestPositionUpdates(self, request: LocationRequest, callback: PositionCallback) -> None:
        """
        Subscribe callback for position fixes

        Args:
            request: Accuracy and interval parameters
            callback: Called for every received fix (possibly from another thread)

        Raises:
            PermissionError: If location access is not granted
        """
        pass

    @abstractmethod
    def removePositionUpdates(self, callback: PositionCallback) -> None:
        """
        Unsubscribe callback. After return no further fixes are delivered to it.
        Removing unknown callback is a no-op.
        """
        pass


class GeocoderInterface(ABC):
    """Abstract reverse geocoding service"""

    @abstractmethod
    async def getFromLocation(self, latitude: float, longitude: float, maxResults: int = 1) -> List[Address]:
        """
        Get candidate addresses for coordinates

        Args:
            latitude: Latitude
            longitude: Longitude
            maxResults: Maximum number of candidates

        Returns:
            List of addresses, empty if nothing found

        Raises:
            Exception: Backend specific errors (network, quota, ...)
        """
        pass
