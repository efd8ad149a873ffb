"""
Network monitor

Tracks whether the network is usable (has internet AND it is validated) from
connectivity service callbacks and exposes it as:
- isNetworkAvailable property, updated synchronously inside callbacks,
- events() async iterator of NetworkEvent with consecutive duplicates dropped,
- availability listeners called on the event loop on every change.

The monitor is advisory: nothing here gates network requests.
"""

import asyncio
import logging
from threading import RLock
from typing import Any, AsyncIterator, Callable, List, Optional, Tuple, TypeAlias

from lib.network import ConnectivityServiceInterface, NetworkCallback, NetworkCapabilities, NetworkEvent, NetworkEventType

logger = logging.getLogger(__name__)

AvailabilityListener: TypeAlias = Callable[[bool], Any]


class _MonitorCallback(NetworkCallback):
    """Forwards platform callbacks to NetworkMonitor as events"""

    def __init__(self, monitor: "NetworkMonitor"):
        self.monitor = monitor

    def onAvailable(self) -> None:
        self.monitor._handleEvent(NetworkEvent.available())

    def onLost(self) -> None:
        self.monitor._handleEvent(NetworkEvent.lost())

    def onLosing(self, maxMsToLive: int) -> None:
        self.monitor._handleEvent(NetworkEvent.losing(maxMsToLive))

    def onUnavailable(self) -> None:
        self.monitor._handleEvent(NetworkEvent.unavailable())

    def onCapabilitiesChanged(self, capabilities: NetworkCapabilities) -> None:
        self.monitor._handleEvent(NetworkEvent.capabilitiesChanged(capabilities))


class NetworkMonitor:
    """
    Observable network availability, dood!

    Example:
        >>> monitor = NetworkMonitor(HttpProbeConnectivityService())
        >>> monitor.start()
        >>> monitor.addAvailabilityListener(lambda available: print(available))
        >>> async for event in monitor.events():
        ...     print(event.type)
    """

    def __init__(self, connectivityService: ConnectivityServiceInterface):
        self.connectivityService = connectivityService

        self._lock = RLock()
        self._isAvailable = self._isUsable(connectivityService.getActiveCapabilities())
        self._availabilityListeners: List[AvailabilityListener] = []
        self._eventSubscribers: List[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = []
        self._callback = _MonitorCallback(self)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: set[asyncio.Task] = set()

    @staticmethod
    def _isUsable(capabilities: Optional[NetworkCapabilities]) -> bool:
        return capabilities is not None and capabilities.isUsable

    @property
    def isNetworkAvailable(self) -> bool:
        with self._lock:
            return self._isAvailable

    @property
    def isStarted(self) -> bool:
        return self._loop is not None

    def start(self) -> None:
        """Register platform callback. Must be called from running event loop, idempotent."""
        if self._loop is not None:
            return
        self._loop = asyncio.get_running_loop()
        with self._lock:
            self._isAvailable = self._isUsable(self.connectivityService.getActiveCapabilities())
        self.connectivityService.registerNetworkCallback(self._callback)
        logger.info(f"Network monitor started, network available: {self.isNetworkAvailable}")

    def stop(self) -> None:
        """Unregister platform callback"""
        if self._loop is None:
            return
        self.connectivityService.unregisterNetworkCallback(self._callback)
        self._loop = None
        logger.info("Network monitor stopped")

    def addAvailabilityListener(self, listener: AvailabilityListener) -> None:
        with self._lock:
            if listener not in self._availabilityListeners:
                self._availabilityListeners.append(listener)

    def removeAvailabilityListener(self, listener: AvailabilityListener) -> None:
        with self._lock:
            if listener in self._availabilityListeners:
                self._availabilityListeners.remove(listener)

    async def events(self) -> AsyncIterator[NetworkEvent]:
        """
        Iterate connectivity events

        First event reflects current state (AVAILABLE or UNAVAILABLE),
        consecutive duplicate events are suppressed. Iteration ends only
        when the consumer stops it.
        """
        queue: asyncio.Queue[NetworkEvent] = asyncio.Queue()
        subscriber = (asyncio.get_running_loop(), queue)
        with self._lock:
            self._eventSubscribers.append(subscriber)

        try:
            lastEvent = NetworkEvent.available() if self.isNetworkAvailable else NetworkEvent.unavailable()
            yield lastEvent
            while True:
                event = await queue.get()
                if event == lastEvent:
                    continue
                lastEvent = event
                yield event
        finally:
            with self._lock:
                if subscriber in self._eventSubscribers:
                    self._eventSubscribers.remove(subscriber)

    def _handleEvent(self, event: NetworkEvent) -> None:
        """Called from platform callback, possibly from foreign thread"""
        with self._lock:
            wasAvailable = self._isAvailable
            match event.type:
                case NetworkEventType.AVAILABLE:
                    self._isAvailable = True
                case NetworkEventType.LOST | NetworkEventType.UNAVAILABLE:
                    self._isAvailable = False
                case NetworkEventType.CAPABILITIES_CHANGED:
                    self._isAvailable = self._isUsable(event.capabilities)
                case NetworkEventType.LOSING:
                    pass
            isAvailable = self._isAvailable
            subscribers = list(self._eventSubscribers)

        logger.debug(f"Network event: {event}, available: {isAvailable}")

        for loop, queue in subscribers:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, event)
            except RuntimeError as e:
                logger.warning(f"Can't deliver network event, loop is closed: {e}")

        if isAvailable != wasAvailable:
            logger.info(f"Network availability changed: {wasAvailable} -> {isAvailable}")
            loop = self._loop
            if loop is not None:
                loop.call_soon_threadsafe(self._notifyAvailability, isAvailable)

    def _notifyAvailability(self, isAvailable: bool) -> None:
        if self._loop is None:
            # Scheduled before stop()
            return

        with self._lock:
            listeners = list(self._availabilityListeners)

        for listener in listeners:
            try:
                ret = listener(isAvailable)
                if asyncio.iscoroutine(ret):
                    task = asyncio.create_task(ret)
                    self._tasks.add(task)
                    task.add_done_callback(self._tasks.discard)
            except Exception as e:
                logger.error(f"Error in network availability listener {listener}: {e}")
                logger.exception(e)
