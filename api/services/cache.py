"""Caching utilities for API responses."""

import time
from typing import Any
from collections import OrderedDict

from api.config import get_settings


class TTLCache:
    """Simple TTL cache with max size limit."""

    def __init__(self, maxsize: int = 128, ttl: int = 3600):
        """Initialize cache.

        Args:
            maxsize: Maximum number of items to cache
            ttl: Time-to-live in seconds
        """
        self.maxsize = maxsize
        self.ttl = ttl
        self._cache: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Any | None:
        """Get item from cache if not expired."""
        if key not in self._cache:
            return None

        timestamp, value = self._cache[key]
        if time.time() - timestamp > self.ttl:
            del self._cache[key]
            return None

        # Move to end (most recently used)
        self._cache.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set item in cache."""
        # Remove oldest items if at capacity
        while len(self._cache) >= self.maxsize:
            self._cache.popitem(last=False)

        self._cache[key] = (time.time(), value)

    def clear(self) -> None:
        """Clear all cached items."""
        self._cache.clear()

    def invalidate(self, pattern: str) -> int:
        """Invalidate cache entries matching pattern.

        Args:
            pattern: String pattern to match keys against

        Returns:
            Number of entries invalidated
        """
        keys_to_remove = [k for k in self._cache.keys() if pattern in k]
        for key in keys_to_remove:
            del self._cache[key]
        return len(keys_to_remove)

    def __len__(self) -> int:
        return len(self._cache)


# Tag list is reference data; question results are never cached
tag_cache = TTLCache(maxsize=8, ttl=get_settings().tag_cache_ttl_seconds)


def clear_all_caches() -> None:
    """Clear all cache instances."""
    tag_cache.clear()
