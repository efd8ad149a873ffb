"""
Refresh service: periodic weather refresh for current location
"""

from .service import RefreshCallback, RefreshScheduler

__all__ = [
    "RefreshScheduler",
    "RefreshCallback",
]
