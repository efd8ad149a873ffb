"""
Core type definitions for lib.cache, dood!

Cache entries are immutable: an entry is created by a successful store and is
replaced (never modified in place) by the next store under the same key.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeAlias, TypeVar

V = TypeVar("V")  # Value type - can be any type

TimeFunc: TypeAlias = Callable[[], float]
"""Clock returning current Unix time in seconds (time.time compatible)"""


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """
    Single cache entry

    Attributes:
        key: Cache key the entry is stored under
        value: Cached value
        timestamp: Insertion time (Unix epoch, milliseconds)
    """

    key: str
    value: V
    timestamp: int

    def ageMillis(self, nowMillis: int) -> int:
        """Get entry age in milliseconds"""
        return nowMillis - self.timestamp

    def isFresh(self, nowMillis: int, ttlSeconds: float) -> bool:
        """Check if entry is younger than given TTL"""
        return self.ageMillis(nowMillis) < ttlSeconds * 1000
