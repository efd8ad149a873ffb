"""
Network connectivity library

Example usage:
    from lib.network import HttpProbeConnectivityService, NetworkCallback

    class Printer(NetworkCallback):
        def onAvailable(self) -> None:
            print("online")

    service = HttpProbeConnectivityService()
    service.registerNetworkCallback(Printer())
    service.start()
"""

from .interface import ConnectivityServiceInterface, NetworkCallback
from .models import NetworkCapabilities, NetworkEvent, NetworkEventType, Transport
from .probe import DEFAULT_PROBE_URL, HttpProbeConnectivityService

__all__ = [
    "ConnectivityServiceInterface",
    "NetworkCallback",
    "NetworkCapabilities",
    "NetworkEvent",
    "NetworkEventType",
    "Transport",
    "HttpProbeConnectivityService",
    "DEFAULT_PROBE_URL",
]
