"""
Static location service

Positioning backend for hosts without a positioning device: the position
comes from configuration and may be changed at runtime with pushPosition().
"""

import logging
from threading import RLock
from typing import Dict, List, Optional

from .interface import LocationServiceInterface, PositionCallback
from .models import GeoCoordinate, LocationRequest

logger = logging.getLogger(__name__)


class StaticLocationService(LocationServiceInterface):
    """Location service backed by a configured (or pushed) position"""

    def __init__(self, position: Optional[GeoCoordinate] = None):
        self._position = position
        self._subscribers: Dict[PositionCallback, LocationRequest] = {}
        self._lock = RLock()

    async def getLastKnownPosition(self) -> Optional[GeoCoordinate]:
        with self._lock:
            return self._position

    def requestPositionUpdates(self, request: LocationRequest, callback: PositionCallback) -> None:
        with self._lock:
            self._subscribers[callback] = request
        logger.debug(f"Position updates requested: {request}")

    def removePositionUpdates(self, callback: PositionCallback) -> None:
        with self._lock:
            self._subscribers.pop(callback, None)

    def pushPosition(self, position: GeoCoordinate) -> None:
        """Set new position and deliver it to all subscribers"""
        with self._lock:
            self._position = position
            callbacks: List[PositionCallback] = list(self._subscribers.keys())

        for callback in callbacks:
            try:
                callback(position)
            except Exception as e:
                logger.error(f"Position callback {callback} failed: {e}")

    def subscribersCount(self) -> int:
        with self._lock:
            return len(self._subscribers)
