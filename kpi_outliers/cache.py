"""
In-process result cache with explicit expiry and invalidation.

A cache instance is created by its owner and passed to the collaborators that use
it; there is no module level cache state. Entries live under a namespace (for
example "policies") and a key (for example a fund id), so a whole family of
entries can be dropped at once.
"""

import logging
import threading
import time
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = tuple[str, Hashable]


class ResultCache:
    """Thread-safe TTL cache keyed by (namespace, key)."""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            ttl_seconds: Lifetime of an entry; 0 disables caching
            clock: Monotonic time source, injectable for tests
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, namespace: str, key: Hashable, default: Any = None) -> Any:
        """Return a live entry, evicting it if it has expired."""
        cache_key = (namespace, key)
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is None:
                return default
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[cache_key]
                logger.debug("Cache entry %s:%s expired", namespace, key)
                return default
            return value

    def set(self, namespace: str, key: Hashable, value: Any) -> None:
        if self.ttl_seconds == 0:
            return
        with self._lock:
            self._entries[(namespace, key)] = (self._clock() + self.ttl_seconds, value)

    def get_or_load(self, namespace: str, key: Hashable, loader: Callable[[], T]) -> T:
        """
        Return the cached value, loading and storing it on a miss.

        The loader runs outside the lock; concurrent misses may both load and the
        last one stored wins. Loader exceptions propagate and nothing is stored.
        """
        sentinel = object()
        value = self.get(namespace, key, sentinel)
        if value is not sentinel:
            return value

        logger.debug("Cache miss for %s:%s", namespace, key)
        value = loader()
        self.set(namespace, key, value)
        return value

    def invalidate(self, namespace: str, key: Hashable) -> bool:
        """Drop one entry. Returns True if it was present."""
        with self._lock:
            return self._entries.pop((namespace, key), None) is not None

    def invalidate_namespace(self, namespace: str) -> int:
        """Drop every entry of a namespace. Returns the number of entries removed."""
        with self._lock:
            keys = [cache_key for cache_key in self._entries if cache_key[0] == namespace]
            for cache_key in keys:
                del self._entries[cache_key]
        logger.info("Invalidated %d cache entries in namespace %s", len(keys), namespace)
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        # Counts expired entries that have not been read since they expired
        with self._lock:
            return len(self._entries)
