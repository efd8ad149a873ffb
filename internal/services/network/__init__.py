"""
Network service: observable network availability
"""

from .service import AvailabilityListener, NetworkMonitor

__all__ = [
    "NetworkMonitor",
    "AvailabilityListener",
]
