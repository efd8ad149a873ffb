"""
Weather controller

Presentation boundary: holds observable state for the UI and exposes
imperative triggers. All fetching logic lives in services, controller only
maps results into UiState values.
"""

import logging
from typing import AsyncIterator, Optional

from lib.location import GeoCoordinate
from lib.openweathermap import WeatherSnapshot

from internal.models import Error, Loading, Result, StateValue, Success, UiState, WeatherError
from internal.services.location import LocationProvider
from internal.services.refresh import RefreshScheduler
from internal.services.weather import WeatherRetrievalEngine

from .formatting import formatCoordinateName

logger = logging.getLogger(__name__)


class WeatherController:
    """
    UI facing controller, dood!

    Attributes:
        weatherState: Loading / Success(WeatherSnapshot) / Error(message)
        locationState: Last known coordinate (or None)
        cityNameState: Display name of current place (or None)

    Example:
        >>> controller = WeatherController(engine, locationProvider)
        >>> controller.weatherState.addListener(render)
        >>> await controller.fetchByCity("Berlin")
        >>> controller.startAutoRefresh()
    """

    def __init__(
        self,
        engine: WeatherRetrievalEngine,
        locationProvider: LocationProvider,
        scheduler: Optional[RefreshScheduler] = None,
    ):
        self.engine = engine
        self.locationProvider = locationProvider
        self.scheduler = (
            scheduler
            if scheduler is not None
            else RefreshScheduler(engine, locationProvider, interval=engine.config.refreshInterval)
        )
        if self.scheduler.onResult is None:
            self.scheduler.onResult = self._applyResult

        self.weatherState: StateValue[UiState] = StateValue(Loading())
        self.locationState: StateValue[Optional[GeoCoordinate]] = StateValue(None)
        self.cityNameState: StateValue[Optional[str]] = StateValue(None)

    def _applyResult(self, result: Result[WeatherSnapshot]) -> None:
        if result.isSuccess:
            self.weatherState.set(Success(result.value))
        else:
            error = result.error
            self.weatherState.set(Error(error.message if error is not None else "Unknown error"))

    async def _consume(self, results: AsyncIterator[Result[WeatherSnapshot]]) -> Optional[Result[WeatherSnapshot]]:
        lastResult: Optional[Result[WeatherSnapshot]] = None
        async for result in results:
            self._applyResult(result)
            lastResult = result
        return lastResult

    async def fetchByCoordinate(self, coordinate: GeoCoordinate) -> Optional[Result[WeatherSnapshot]]:
        """Show cached weather for coordinate (if any) and then fresh one"""
        self.weatherState.set(Loading())
        return await self._consume(self.engine.streamByCoordinate(coordinate))

    async def fetchByCity(self, cityName: str) -> Optional[Result[WeatherSnapshot]]:
        """Show weather for city and make it the current place"""
        self.weatherState.set(Loading())
        result = await self._consume(self.engine.streamByCity(cityName))
        if result is not None and result.isSuccess:
            snapshot = result.value
            self.cityNameState.set(snapshot.cityName)
            if snapshot.coordinate is not None:
                self.locationProvider.setCurrentLocation(snapshot.coordinate)
                self.locationState.set(snapshot.coordinate)
        return result

    async def fetchCurrentLocationWeather(self) -> Optional[Result[WeatherSnapshot]]:
        """Resolve current location, its name and show weather for it"""
        self.weatherState.set(Loading())

        locationResult = await self.locationProvider.getCurrentLocation()
        if not locationResult.isSuccess:
            error = locationResult.error or WeatherError.location("Unknown error")
            logger.warning(f"Unable to get current location: {error.message}")
            self.weatherState.set(Error(f"Unable to get current location: {error.message}"))
            return Result.failure(error)

        coordinate = locationResult.value
        self.locationState.set(coordinate)

        if coordinate.name:
            self.cityNameState.set(coordinate.name)
        else:
            nameResult = await self.locationProvider.getCityName(coordinate)
            self.cityNameState.set(
                nameResult.value
                if nameResult.isSuccess
                else formatCoordinateName(coordinate.latitude, coordinate.longitude)
            )

        return await self.fetchByCoordinate(coordinate)

    def startAutoRefresh(self) -> None:
        self.scheduler.start()

    def stopAutoRefresh(self) -> None:
        self.scheduler.stop()

    def clearCache(self) -> None:
        self.engine.clearCache()

    async def close(self) -> None:
        """Stop refresh and release services"""
        await self.scheduler.close()
        await self.locationProvider.close()
        await self.engine.close()
        logger.info("WeatherController closed")
