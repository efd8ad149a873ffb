"""
Types for location service
"""

from enum import StrEnum


class LocationState(StrEnum):
    """
    State of current location resolution

    IDLE -> REQUESTING_LAST_KNOWN -> (RESOLVED | REQUESTING_LIVE)
    REQUESTING_LIVE -> (RESOLVED | TIMED_OUT)
    Any requesting state -> FAILED on permission or service error.
    """

    IDLE = "idle"
    REQUESTING_LAST_KNOWN = "requesting_last_known"
    REQUESTING_LIVE = "requesting_live"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
