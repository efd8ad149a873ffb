"""
Location provider

Resolves current position with bounded wait time:
1. last known position is returned immediately if available,
2. otherwise live updates are requested and the first fix wins,
3. if no fix arrives within timeout the request fails.

The live subscription is released exactly once whatever the outcome
(fix, timeout, error or cancellation of the awaiting task).
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Set, TypeAlias

from lib.location import GeocoderInterface, GeoCoordinate, LocationRequest, LocationServiceInterface, PositionCallback

from internal.models import Result, WeatherError

from .types import LocationState

logger = logging.getLogger(__name__)

LocationListener: TypeAlias = Callable[[GeoCoordinate], Any]

DEFAULT_LIVE_REQUEST = LocationRequest(highAccuracy=True, intervalSeconds=10, minUpdateIntervalSeconds=5)
DEFAULT_TRACKING_REQUEST = LocationRequest(
    highAccuracy=True, intervalSeconds=5, minUpdateIntervalSeconds=5, minDistanceMeters=10
)


class LocationProvider:
    """
    Current position and place name resolver, dood!

    Example:
        >>> provider = LocationProvider(StaticLocationService(), geocoder, timeout=30)
        >>> result = await provider.getCurrentLocation()
        >>> if result.isSuccess:
        ...     cityName = await provider.getCityName(result.value)
    """

    def __init__(
        self,
        locationService: LocationServiceInterface,
        geocoder: Optional[GeocoderInterface] = None,
        timeout: float = 30,
        liveRequest: LocationRequest = DEFAULT_LIVE_REQUEST,
        trackingRequest: LocationRequest = DEFAULT_TRACKING_REQUEST,
    ):
        """
        Initialize provider

        Args:
            locationService: Positioning backend
            geocoder: Reverse geocoder for getCityName() (optional)
            timeout: Max wait for live fix (seconds)
            liveRequest: Parameters for one-shot live request
            trackingRequest: Parameters for continuous tracking
        """
        self.locationService = locationService
        self.geocoder = geocoder
        self.timeout = timeout
        self.liveRequest = liveRequest
        self.trackingRequest = trackingRequest

        self.state = LocationState.IDLE
        self.currentLocation: Optional[GeoCoordinate] = None

        self._listeners: List[LocationListener] = []
        self._trackingCallback: Optional[PositionCallback] = None
        self._tasks: Set[asyncio.Task] = set()

    def _setState(self, state: LocationState) -> None:
        if self.state != state:
            logger.debug(f"Location state: {self.state} -> {state}")
        self.state = state

    def _resolved(self, coordinate: GeoCoordinate) -> Result[GeoCoordinate]:
        self.currentLocation = coordinate
        self._setState(LocationState.RESOLVED)
        logger.info(f"Location resolved: {coordinate}")
        return Result.success(coordinate)

    def _failed(self, state: LocationState, message: str) -> Result[GeoCoordinate]:
        self._setState(state)
        logger.error(message)
        return Result.failure(WeatherError.location(message))

    async def getCurrentLocation(self) -> Result[GeoCoordinate]:
        """
        Get current position

        Returns:
            Result with coordinate or LOCATION error (permission, service failure, timeout)
        """
        self._setState(LocationState.REQUESTING_LAST_KNOWN)
        try:
            lastKnown = await self.locationService.getLastKnownPosition()
        except PermissionError as e:
            return self._failed(LocationState.FAILED, f"Location permission not granted: {e}")
        except Exception as e:
            logger.exception(e)
            return self._failed(LocationState.FAILED, f"Failed to get last known location: {e}")

        if lastKnown is not None:
            return self._resolved(lastKnown)

        self._setState(LocationState.REQUESTING_LIVE)
        return await self._awaitLiveFix()

    async def _awaitLiveFix(self) -> Result[GeoCoordinate]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[GeoCoordinate] = loop.create_future()

        def setFix(coordinate: GeoCoordinate) -> None:
            if not future.done():
                future.set_result(coordinate)

        def onFix(coordinate: GeoCoordinate) -> None:
            # May be called from location service thread
            loop.call_soon_threadsafe(setFix, coordinate)

        try:
            self.locationService.requestPositionUpdates(self.liveRequest, onFix)
        except PermissionError as e:
            return self._failed(LocationState.FAILED, f"Location permission not granted: {e}")
        except Exception as e:
            logger.exception(e)
            return self._failed(LocationState.FAILED, f"Failed to request location updates: {e}")

        try:
            coordinate = await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._failed(LocationState.TIMED_OUT, f"Location request timed out after {self.timeout}s")
        except asyncio.CancelledError:
            self._setState(LocationState.IDLE)
            logger.debug("Location request cancelled")
            raise
        finally:
            self.locationService.removePositionUpdates(onFix)

        return self._resolved(coordinate)

    async def getCityName(self, coordinate: GeoCoordinate) -> Result[str]:
        """
        Get place name for coordinate via reverse geocoding

        First non-empty of locality, subAdminArea, adminArea, subLocality
        of the first candidate address having any of them.
        """
        if self.geocoder is None:
            return Result.failure(WeatherError.location("Geocoder is not configured"))

        try:
            addresses = await self.geocoder.getFromLocation(coordinate.latitude, coordinate.longitude, 1)
        except Exception as e:
            logger.error(f"Reverse geocoding failed for {coordinate}: {e}")
            return Result.failure(WeatherError.location(f"Failed to get city name: {e}"))

        for address in addresses:
            for name in (address.locality, address.subAdminArea, address.adminArea, address.subLocality):
                if name:
                    return Result.success(name)

        logger.warning(f"No place name found for {coordinate}")
        return Result.failure(WeatherError.location("City name not found"))

    def setCurrentLocation(self, coordinate: GeoCoordinate) -> None:
        """Make coordinate chosen elsewhere (e.g. found by city search) the current location"""
        self.currentLocation = coordinate
        logger.info(f"Current location set: {coordinate}")

    ###
    # Continuous tracking
    ###

    @property
    def isTracking(self) -> bool:
        return self._trackingCallback is not None

    def startTracking(self) -> bool:
        """
        Subscribe to continuous updates, no-op if already tracking.
        Must be called from running event loop.

        Returns:
            True if tracking is active
        """
        if self._trackingCallback is not None:
            return True

        loop = asyncio.get_running_loop()

        def onTrackingFix(coordinate: GeoCoordinate) -> None:
            loop.call_soon_threadsafe(self._onTrackingFix, onTrackingFix, coordinate)

        try:
            self.locationService.requestPositionUpdates(self.trackingRequest, onTrackingFix)
        except PermissionError as e:
            logger.error(f"Location permission not granted, can't start tracking: {e}")
            return False

        self._trackingCallback = onTrackingFix
        logger.info("Location tracking started")
        return True

    def stopTracking(self) -> None:
        callback = self._trackingCallback
        self._trackingCallback = None
        if callback is not None:
            self.locationService.removePositionUpdates(callback)
            logger.info("Location tracking stopped")

    def addListener(self, listener: LocationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def removeListener(self, listener: LocationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _onTrackingFix(self, callback: PositionCallback, coordinate: GeoCoordinate) -> None:
        if self._trackingCallback is not callback:
            # Fix scheduled by stopped tracking session
            return

        self.currentLocation = coordinate
        for listener in list(self._listeners):
            try:
                ret = listener(coordinate)
                if asyncio.iscoroutine(ret):
                    task = asyncio.create_task(ret)
                    self._tasks.add(task)
                    task.add_done_callback(self._tasks.discard)
            except Exception as e:
                logger.error(f"Error in location listener {listener}: {e}")
                logger.exception(e)

    async def close(self) -> None:
        """Stop tracking and cancel pending listener tasks"""
        self.stopTracking()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
