"""
Data models for network connectivity library
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import FrozenSet, Optional


class Transport(StrEnum):
    """Physical transport of a network"""

    WIFI = "wifi"
    CELLULAR = "cellular"
    ETHERNET = "ethernet"


@dataclass(frozen=True)
class NetworkCapabilities:
    """Capabilities of the active network, dood!

    Network is usable only when it both claims internet access and the access
    was validated (i.e. some real request went through).
    """

    hasInternet: bool = False
    hasValidated: bool = False
    transports: FrozenSet[Transport] = field(default_factory=frozenset)

    @property
    def isUsable(self) -> bool:
        return self.hasInternet and self.hasValidated

    def hasTransport(self, transport: Transport) -> bool:
        return transport in self.transports


class NetworkEventType(StrEnum):
    """Kind of connectivity event"""

    AVAILABLE = "available"
    LOST = "lost"
    LOSING = "losing"
    UNAVAILABLE = "unavailable"
    CAPABILITIES_CHANGED = "capabilities_changed"


@dataclass(frozen=True)
class NetworkEvent:
    """
    Connectivity event

    Attributes:
        type: Event kind
        maxMsToLive: For LOSING events, how long the network is expected to live
        capabilities: For CAPABILITIES_CHANGED events, new capabilities
    """

    type: NetworkEventType
    maxMsToLive: Optional[int] = None
    capabilities: Optional[NetworkCapabilities] = None

    @classmethod
    def available(cls) -> "NetworkEvent":
        return cls(NetworkEventType.AVAILABLE)

    @classmethod
    def lost(cls) -> "NetworkEvent":
        return cls(NetworkEventType.LOST)

    @classmethod
    def losing(cls, maxMsToLive: int) -> "NetworkEvent":
        return cls(NetworkEventType.LOSING, maxMsToLive=maxMsToLive)

    @classmethod
    def unavailable(cls) -> "NetworkEvent":
        return cls(NetworkEventType.UNAVAILABLE)

    @classmethod
    def capabilitiesChanged(cls, capabilities: NetworkCapabilities) -> "NetworkEvent":
        return cls(NetworkEventType.CAPABILITIES_CHANGED, capabilities=capabilities)
