"""
Abstract cache interface for lib.cache, dood!

This module defines the generic CacheInterface that all cache implementations
must follow. Caches distinguish "fresh" entries (younger than TTL) from
"stale" ones, but never drop entries because of their age: callers decide
whether stale data is acceptable.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional

from .types import CacheEntry, V


class CacheInterface(ABC, Generic[V]):
    """
    Generic string-keyed cache interface, dood!

    Type Parameters:
        V: The value type (any type)

    Example:
        >>> cache = DictCache[dict](defaultTtl=900)
        >>> await cache.set("city:berlin", {"temp": 18.5})
        >>> fresh = await cache.get("city:berlin")  # None if older than TTL
        >>> entry = await cache.getEntry("city:berlin")  # Any age
    """

    @abstractmethod
    async def get(self, key: str, ttl: Optional[float] = None) -> Optional[V]:
        """
        Get cached value if it is fresh

        Args:
            key: The cache key to retrieve
            ttl: Optional TTL override (seconds). If None, default TTL is used.

        Returns:
            Optional[V]: The cached value if found and fresh, None otherwise
        """
        pass

    @abstractmethod
    async def getEntry(self, key: str) -> Optional[CacheEntry[V]]:
        """
        Get cache entry regardless of its age

        Args:
            key: The cache key to retrieve

        Returns:
            Optional[CacheEntry[V]]: Entry (fresh or stale) or None if absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: V) -> bool:
        """
        Store value, replacing any previous entry under the key

        Args:
            key: The cache key to store the value under
            value: The value to cache

        Returns:
            bool: True if the value was successfully stored, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """
        Remove all entries, dood!

        This operation is synchronous: entries are gone once it returns.
        """
        pass

    @abstractmethod
    def getStats(self) -> Dict[str, Any]:
        """
        Get implementation-specific cache statistics

        Returns:
            Dict[str, Any]: Dictionary containing cache statistics
        """
        pass
