"""
Abstract interfaces for platform connectivity services
"""

from abc import ABC, abstractmethod
from typing import Optional

from .models import NetworkCapabilities


class NetworkCallback:
    """
    Receiver of connectivity callbacks, dood!

    All methods are no-ops, subclasses override what they need. Callbacks may
    be invoked from any thread and must not block.
    """

    def onAvailable(self) -> None:
        pass

    def onLost(self) -> None:
        pass

    def onLosing(self, maxMsToLive: int) -> None:
        pass

    def onUnavailable(self) -> None:
        pass

    def onCapabilitiesChanged(self, capabilities: NetworkCapabilities) -> None:
        pass


class ConnectivityServiceInterface(ABC):
    """Abstract connectivity service"""

    @abstractmethod
    def registerNetworkCallback(self, callback: NetworkCallback) -> None:
        """Start delivering connectivity callbacks to callback"""
        pass

    @abstractmethod
    def unregisterNetworkCallback(self, callback: NetworkCallback) -> None:
        """Stop delivering callbacks. Unregistering unknown callback is a no-op."""
        pass

    @abstractmethod
    def getActiveCapabilities(self) -> Optional[NetworkCapabilities]:
        """
        Get capabilities of the active network

        Returns:
            Capabilities or None if there is no active network (or it is not known yet)
        """
        pass
