"""
lib.cache - Generic in-memory cache library, dood!

Core Components:
- CacheInterface: Abstract base class for all cache implementations
- CacheEntry: Immutable entry (key, value, insertion timestamp in ms)
- DictCache: Thread-safe dictionary-based cache with fresh/stale semantics
- NullCache: No-op cache for disabled caching

Example Usage:
    >>> from lib.cache import DictCache
    >>>
    >>> cache = DictCache[dict](defaultTtl=900)
    >>> await cache.set("coord:52.5200:13.4000", {"temp": 18.5})
    >>> fresh = await cache.get("coord:52.5200:13.4000")
    >>> anyAge = await cache.getEntry("coord:52.5200:13.4000")
"""

from .dict_cache import DictCache
from .interface import CacheInterface
from .null_cache import NullCache
from .types import CacheEntry, TimeFunc, V

__all__ = [
    # Core types
    "CacheEntry",
    "TimeFunc",
    "V",
    # Interfaces
    "CacheInterface",
    # Implementations
    "DictCache",
    "NullCache",
]
