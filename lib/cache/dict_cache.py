"""
Dictionary-based in-memory cache implementation for lib.cache, dood!

Memory-only: nothing survives process restart. Entries are never evicted by
age, get() just stops returning them once they are older than TTL while
getEntry() keeps returning them until they are replaced or cleared.
"""

import logging
import time
from threading import RLock
from typing import Any, Dict, Optional

from .interface import CacheInterface
from .types import CacheEntry, TimeFunc, V

logger = logging.getLogger(__name__)


class DictCache(CacheInterface[V]):
    """
    Thread-safe dictionary cache, dood!

    Every store replaces the whole entry for the key under a lock, so readers
    never observe partially written data.

    Example:
        >>> cache = DictCache[str](defaultTtl=60)
        >>> await cache.set("greeting", "Hello, dood!")
        >>> await cache.get("greeting")
        'Hello, dood!'
    """

    def __init__(self, defaultTtl: float = 3600, timeFunc: TimeFunc = time.time):
        """
        Initialize empty cache

        Args:
            defaultTtl: Default freshness TTL in seconds (default: 1 hour)
            timeFunc: Clock function, mostly for tests (default: time.time)
        """
        self.defaultTtl = defaultTtl
        self._timeFunc = timeFunc
        self._entries: Dict[str, CacheEntry[V]] = {}
        self._lock = RLock()

    def _nowMillis(self) -> int:
        return int(self._timeFunc() * 1000)

    async def get(self, key: str, ttl: Optional[float] = None) -> Optional[V]:
        effectiveTtl = ttl if ttl is not None else self.defaultTtl
        entry = await self.getEntry(key)
        if entry is None:
            logger.debug(f"Cache miss for key: {key}")
            return None

        if not entry.isFresh(self._nowMillis(), effectiveTtl):
            logger.debug(f"Cache entry is stale for key: {key}")
            return None

        logger.debug(f"Cache hit for key: {key}")
        return entry.value

    async def getEntry(self, key: str) -> Optional[CacheEntry[V]]:
        with self._lock:
            return self._entries.get(key)

    async def set(self, key: str, value: V) -> bool:
        entry = CacheEntry(key=key, value=value, timestamp=self._nowMillis())
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"Stored cache entry for key: {key}")
        return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cleared all cache data")

    def getStats(self) -> Dict[str, Any]:
        nowMillis = self._nowMillis()
        with self._lock:
            entries = list(self._entries.values())

        freshCount = sum(1 for entry in entries if entry.isFresh(nowMillis, self.defaultTtl))
        return {
            "entries": len(entries),
            "freshEntries": freshCount,
            "staleEntries": len(entries) - freshCount,
            "defaultTtl": self.defaultTtl,
        }
