"""
Periodic weather refresh

Every interval fetches weather for the current location (if one is known)
and hands the result to onResult callback.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, TypeAlias

from lib.openweathermap import WeatherSnapshot

from internal.models import Result
from internal.services.location import LocationProvider
from internal.services.weather import WeatherRetrievalEngine

logger = logging.getLogger(__name__)

RefreshCallback: TypeAlias = Callable[[Result[WeatherSnapshot]], Any]


class RefreshScheduler:
    """
    Cancellable refresh loop, dood!

    Example:
        >>> scheduler = RefreshScheduler(engine, locationProvider, interval=60, onResult=render)
        >>> scheduler.start()
        >>> scheduler.triggerNow()  # Refresh without waiting for interval
        >>> scheduler.stop()
    """

    def __init__(
        self,
        engine: WeatherRetrievalEngine,
        locationProvider: LocationProvider,
        interval: float = 60,
        onResult: Optional[RefreshCallback] = None,
    ):
        self.engine = engine
        self.locationProvider = locationProvider
        self.interval = interval
        self.onResult = onResult

        self._task: Optional[asyncio.Task] = None
        self._wakeEvent: Optional[asyncio.Event] = None
        self._networkMonitor = None

    @property
    def isRunning(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """(Re)start refresh loop. Must be called from running event loop."""
        self.stop()
        self._wakeEvent = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._wakeEvent))
        logger.info(f"Auto refresh started, interval: {self.interval}s")

    def stop(self) -> None:
        """Cancel refresh loop"""
        task = self._task
        self._task = None
        self._wakeEvent = None
        if task is not None and not task.done():
            task.cancel()
            logger.info("Auto refresh stopped")

    def triggerNow(self) -> None:
        """Wake refresh loop immediately"""
        if self._wakeEvent is not None:
            self._wakeEvent.set()

    def attachNetworkMonitor(self, monitor) -> None:
        """Refresh immediately when network becomes available"""
        self.detachNetworkMonitor()
        self._networkMonitor = monitor
        monitor.addAvailabilityListener(self._onNetworkAvailabilityChanged)

    def detachNetworkMonitor(self) -> None:
        if self._networkMonitor is not None:
            self._networkMonitor.removeAvailabilityListener(self._onNetworkAvailabilityChanged)
            self._networkMonitor = None

    def _onNetworkAvailabilityChanged(self, isAvailable: bool) -> None:
        if isAvailable:
            logger.debug("Network is back, triggering refresh")
            self.triggerNow()

    async def refreshOnce(self) -> Optional[Result[WeatherSnapshot]]:
        """
        Fetch weather for current location

        Returns:
            Fetch result or None if location is unknown
        """
        coordinate = self.locationProvider.currentLocation
        if coordinate is None:
            logger.debug("Current location is unknown, skipping refresh")
            return None

        result = await self.engine.fetchByCoordinate(coordinate)
        if self.onResult is not None:
            try:
                ret = self.onResult(result)
                if asyncio.iscoroutine(ret):
                    await ret
            except Exception as e:
                logger.error(f"Error in refresh callback: {e}")
                logger.exception(e)
        return result

    async def _run(self, wakeEvent: asyncio.Event) -> None:
        # Deadlines are counted from loop start
        loop = asyncio.get_running_loop()
        nextRun = loop.time() + self.interval
        while True:
            try:
                await asyncio.wait_for(wakeEvent.wait(), timeout=max(0.0, nextRun - loop.time()))
            except asyncio.TimeoutError:
                nextRun += self.interval
            wakeEvent.clear()
            await self.refreshOnce()

            # Ticks missed by slow refresh are skipped, not run in burst
            now = loop.time()
            while nextRun <= now:
                nextRun += self.interval

    async def close(self) -> None:
        """Stop loop and wait for it to finish"""
        task = self._task
        self.stop()
        self.detachNetworkMonitor()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
