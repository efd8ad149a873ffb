"""
HTTP probe based connectivity service

Periodically requests a "generate_204"-like URL and turns the outcome into
NetworkCallback notifications:
- any HTTP response means the network has internet access,
- 2xx response means the access is validated (no captive portal, etc).
"""

import asyncio
import logging
from threading import RLock
from typing import FrozenSet, List, Optional

import httpx

from .interface import ConnectivityServiceInterface, NetworkCallback
from .models import NetworkCapabilities, Transport

logger = logging.getLogger(__name__)

DEFAULT_PROBE_URL = "https://www.gstatic.com/generate_204"


class HttpProbeConnectivityService(ConnectivityServiceInterface):
    """
    Connectivity service backed by periodic HTTP probes, dood!

    Example:
        >>> service = HttpProbeConnectivityService(probeInterval=30)
        >>> service.registerNetworkCallback(myCallback)
        >>> service.start()
        >>> ...
        >>> await service.stop()
    """

    def __init__(
        self,
        probeUrl: str = DEFAULT_PROBE_URL,
        probeInterval: float = 30,
        requestTimeout: float = 5,
        transports: FrozenSet[Transport] = frozenset({Transport.ETHERNET}),
    ):
        """
        Initialize probe service

        Args:
            probeUrl: URL to request
            probeInterval: Delay between probes (seconds)
            requestTimeout: Timeout for single probe (seconds)
            transports: Transports reported in capabilities
        """
        self.probeUrl = probeUrl
        self.probeInterval = probeInterval
        self.requestTimeout = requestTimeout
        self.transports = transports

        self._callbacks: List[NetworkCallback] = []
        self._lock = RLock()
        self._capabilities: Optional[NetworkCapabilities] = None
        self._task: Optional[asyncio.Task] = None

    def registerNetworkCallback(self, callback: NetworkCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                return
            self._callbacks.append(callback)
            capabilities = self._capabilities

        # Deliver current state to the new subscriber
        if capabilities is not None:
            if capabilities.isUsable:
                self._safeCall(callback.onAvailable)
            self._safeCall(callback.onCapabilitiesChanged, capabilities)

    def unregisterNetworkCallback(self, callback: NetworkCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def getActiveCapabilities(self) -> Optional[NetworkCapabilities]:
        with self._lock:
            capabilities = self._capabilities
        if capabilities is None or not capabilities.hasInternet:
            return None
        return capabilities

    def start(self) -> None:
        """Start probing loop. Must be called from running event loop."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self._probeLoop())
        logger.info(f"Connectivity probing started: {self.probeUrl} every {self.probeInterval}s")

    async def stop(self) -> None:
        """Stop probing loop"""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Connectivity probing stopped")

    async def _probeLoop(self) -> None:
        while True:
            await self.checkNow()
            await asyncio.sleep(self.probeInterval)

    async def _probe(self) -> NetworkCapabilities:
        try:
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(self.probeUrl)
        except httpx.RequestError as e:
            logger.debug(f"Connectivity probe failed: {e}")
            return NetworkCapabilities(transports=self.transports)

        return NetworkCapabilities(
            hasInternet=True,
            hasValidated=200 <= response.status_code < 300,
            transports=self.transports,
        )

    async def checkNow(self) -> NetworkCapabilities:
        """Probe once and notify callbacks about state transitions"""
        capabilities = await self._probe()
        self.updateCapabilities(capabilities)
        return capabilities

    def updateCapabilities(self, capabilities: NetworkCapabilities) -> None:
        """
        Apply new capabilities and dispatch callbacks

        Transitions:
            unknown -> not usable: onUnavailable
            * -> usable: onAvailable (if was not usable)
            usable -> not usable: onLost
            any change: onCapabilitiesChanged
        """
        with self._lock:
            previous = self._capabilities
            self._capabilities = capabilities
            callbacks = list(self._callbacks)

        if previous == capabilities:
            return

        wasUsable = previous is not None and previous.isUsable
        logger.debug(f"Connectivity changed: {previous} -> {capabilities}")

        for callback in callbacks:
            if capabilities.isUsable and not wasUsable:
                self._safeCall(callback.onAvailable)
            elif not capabilities.isUsable and wasUsable:
                self._safeCall(callback.onLost)
            elif previous is None and not capabilities.isUsable:
                self._safeCall(callback.onUnavailable)
            self._safeCall(callback.onCapabilitiesChanged, capabilities)

    @staticmethod
    def _safeCall(func, *args) -> None:
        try:
            func(*args)
        except Exception as e:
            logger.error(f"Error in network callback {func}: {e}")
            logger.exception(e)
