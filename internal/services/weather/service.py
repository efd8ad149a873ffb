"""
Weather retrieval engine

Fetches current weather by coordinate or by city name through WeatherClient,
caches parsed snapshots in memory and falls back to cached data (of any age)
when the network is unavailable.

Policy per call: cache check -> network -> cache update.
- Fresh entry (younger than TTL): one-shot fetch returns it without network.
- Success: snapshot replaces cache entry.
- NetworkError: cached entry for the key is returned if present.
- ApiError: returned as server error even if cached entry exists.
- Anything else: unknown error with the cause retained.
"""

import asyncio
import functools
import logging
from typing import AsyncIterator, Dict, Optional, Set

from lib.cache import CacheInterface, DictCache
from lib.location import GeoCoordinate
from lib.openweathermap import ApiError, NetworkError, WeatherClient, WeatherSnapshot, parseCurrentWeather

from internal.models import Result, WeatherError

from .types import WeatherEngineConfig, WeatherFetcher, WeatherRequest

logger = logging.getLogger(__name__)


def makeCoordinateKey(coordinate: GeoCoordinate) -> str:
    """Cache key for coordinate, 4 decimal places (~11m). Name is ignored."""
    return f"coord:{coordinate.latitude:.4f}:{coordinate.longitude:.4f}"


def normalizeCityName(cityName: str) -> str:
    """Trim, collapse inner whitespace and lower-case"""
    return " ".join(cityName.split()).lower()


def makeCityKey(cityName: str) -> str:
    return f"city:{normalizeCityName(cityName)}"


class WeatherRetrievalEngine:
    """
    Cache-aware weather fetcher, dood!

    Example:
        >>> engine = WeatherRetrievalEngine(WeatherClient(apiKey="..."))
        >>> result = await engine.fetchByCity("Berlin")
        >>> async for result in engine.streamByCoordinate(GeoCoordinate(52.52, 13.40)):
        ...     render(result)
        >>> await engine.close()
    """

    def __init__(
        self,
        client: WeatherClient,
        cache: Optional[CacheInterface[WeatherSnapshot]] = None,
        config: Optional[WeatherEngineConfig] = None,
    ):
        """
        Initialize engine

        Args:
            client: OpenWeatherMap client (closed by close())
            cache: Snapshot cache (default: DictCache with config TTL)
            config: Timing constants (default: WeatherEngineConfig())
        """
        self.config = config if config is not None else WeatherEngineConfig()
        self.client = client
        self.cache: CacheInterface[WeatherSnapshot] = (
            cache if cache is not None else DictCache(defaultTtl=self.config.cacheTtl)
        )

        # Requests whose last attempt ended with NetworkError, retried on recovery
        self._failedRequests: Dict[str, WeatherRequest] = {}
        self._backgroundTasks: Set[asyncio.Task] = set()
        self._networkMonitor = None

    ###
    # Public API
    ###

    async def fetchByCoordinate(self, coordinate: GeoCoordinate) -> Result[WeatherSnapshot]:
        """Get current weather for coordinate"""
        request = self._coordinateRequest(coordinate)
        return await self._fetch(request)

    async def fetchByCity(self, cityName: str) -> Result[WeatherSnapshot]:
        """Get current weather for city name (case and whitespace insensitive)"""
        request = self._cityRequest(cityName)
        if request is None:
            return Result.failure(WeatherError.location("City name cannot be empty"))
        return await self._fetch(request)

    async def streamByCoordinate(self, coordinate: GeoCoordinate) -> AsyncIterator[Result[WeatherSnapshot]]:
        """
        Yield cached snapshot (if any, fresh or stale) and then result of network fetch
        """
        async for result in self._stream(self._coordinateRequest(coordinate)):
            yield result

    async def streamByCity(self, cityName: str) -> AsyncIterator[Result[WeatherSnapshot]]:
        """
        Yield cached snapshot (if any, fresh or stale) and then result of network fetch
        """
        request = self._cityRequest(cityName)
        if request is None:
            yield Result.failure(WeatherError.location("City name cannot be empty"))
            return
        async for result in self._stream(request):
            yield result

    def clearCache(self) -> None:
        """Remove all cached snapshots"""
        self.cache.clear()
        logger.info("Weather cache cleared")

    def attachNetworkMonitor(self, monitor) -> None:
        """
        Re-fetch requests failed with NetworkError when network comes back.

        Args:
            monitor: NetworkMonitor
        """
        self.detachNetworkMonitor()
        self._networkMonitor = monitor
        monitor.addAvailabilityListener(self._onNetworkAvailabilityChanged)

    def detachNetworkMonitor(self) -> None:
        if self._networkMonitor is not None:
            self._networkMonitor.removeAvailabilityListener(self._onNetworkAvailabilityChanged)
            self._networkMonitor = None

    def getFailedKeys(self) -> Set[str]:
        """Keys waiting for network recovery"""
        return set(self._failedRequests.keys())

    async def retryFailed(self) -> int:
        """
        Re-fetch every request whose last attempt failed with NetworkError

        Returns:
            Number of requests that succeeded
        """
        requests = list(self._failedRequests.values())
        if not requests:
            return 0

        logger.info(f"Retrying {len(requests)} weather requests after network recovery")
        succeeded = 0
        for request in requests:
            result = await self._fetchFromNetwork(request)
            if result.isSuccess:
                succeeded += 1
        return succeeded

    async def close(self) -> None:
        """Detach from network monitor, cancel background refetches and close client"""
        self.detachNetworkMonitor()

        tasks = list(self._backgroundTasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._backgroundTasks.clear()

        await self.client.close()
        logger.info("WeatherRetrievalEngine closed")

    ###
    # Internals
    ###

    def _coordinateRequest(self, coordinate: GeoCoordinate) -> WeatherRequest:
        fetcher: WeatherFetcher = functools.partial(
            self.client.getCurrentWeather, coordinate.latitude, coordinate.longitude
        )
        return WeatherRequest(key=makeCoordinateKey(coordinate), fetcher=fetcher, hint=coordinate)

    def _cityRequest(self, cityName: str) -> Optional[WeatherRequest]:
        query = " ".join(cityName.split())
        if not query:
            logger.warning("Empty city name requested")
            return None
        fetcher: WeatherFetcher = functools.partial(self.client.getWeatherByCity, query)
        return WeatherRequest(key=makeCityKey(query), fetcher=fetcher, cityName=query)

    async def _fetch(self, request: WeatherRequest) -> Result[WeatherSnapshot]:
        cached = await self.cache.get(request.key, self.config.cacheTtl)
        if cached is not None:
            logger.debug(f"Returning fresh cached weather for {request.key}")
            return Result.success(cached)
        return await self._fetchFromNetwork(request)

    async def _stream(self, request: WeatherRequest) -> AsyncIterator[Result[WeatherSnapshot]]:
        entry = await self.cache.getEntry(request.key)
        if entry is not None:
            logger.debug(f"Emitting cached weather for {request.key} first")
            yield Result.success(entry.value)
        yield await self._fetchFromNetwork(request)

    async def _fetchFromNetwork(self, request: WeatherRequest) -> Result[WeatherSnapshot]:
        key = request.key
        try:
            data = await request.fetcher()
            snapshot = parseCurrentWeather(data, request.hint)
            await self.cache.set(key, snapshot)
        except NetworkError as e:
            self._failedRequests[key] = request
            entry = await self.cache.getEntry(key)
            if entry is not None:
                logger.warning(f"Network error for {key}, serving cached data: {e}")
                return Result.success(entry.value)
            logger.error(f"Network error for {key}, no cached data: {e}")
            return Result.failure(WeatherError.network(e.message))
        except ApiError as e:
            self._failedRequests.pop(key, None)
            message = e.message
            if e.code == 404 and request.cityName is not None:
                message = f"City '{request.cityName}' not found"
            logger.error(f"API error for {key}: {e}")
            return Result.failure(WeatherError.server(e.code, message))
        except Exception as e:
            self._failedRequests.pop(key, None)
            logger.error(f"Unexpected error while fetching weather for {key}: {e}")
            logger.exception(e)
            return Result.failure(WeatherError.unknown(str(e) or type(e).__name__, e))

        self._failedRequests.pop(key, None)
        logger.debug(f"Fetched weather for {key}: {snapshot.temperature}°C, {snapshot.description}")
        return Result.success(snapshot)

    def _onNetworkAvailabilityChanged(self, isAvailable: bool) -> None:
        if not isAvailable or not self._failedRequests:
            return

        task = asyncio.get_running_loop().create_task(self.retryFailed())
        self._backgroundTasks.add(task)
        task.add_done_callback(self._backgroundTasks.discard)
