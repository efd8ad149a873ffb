"""
Null cache implementation for lib.cache, dood!

Implements CacheInterface but never stores anything. Used where caching
is disabled by configuration.
"""

from typing import Any, Dict, Optional

from .interface import CacheInterface
from .types import CacheEntry, V


class NullCache(CacheInterface[V]):
    """No-op cache that never stores anything, dood!"""

    async def get(self, key: str, ttl: Optional[float] = None) -> Optional[V]:
        """Always a cache miss"""
        return None

    async def getEntry(self, key: str) -> Optional[CacheEntry[V]]:
        """Always a cache miss"""
        return None

    async def set(self, key: str, value: V) -> bool:
        """
        Do nothing (don't cache), but pretend to succeed, dood!

        Returns:
            bool: Always True
        """
        return True

    def clear(self) -> None:
        pass

    def getStats(self) -> Dict[str, Any]:
        return {"enabled": False}
