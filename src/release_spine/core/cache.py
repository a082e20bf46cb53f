"""
In-memory TTL cache for upstream documents.

The two source documents change a few times a month but are requested on
every API call, so the document source keeps the last fetched body per
key until its TTL expires.

    CacheBackend (Protocol)
    └── InMemoryCache  (single-process, bounded LRU, lazy expiry)

Examples:
    >>> cache = InMemoryCache(max_size=16, default_ttl_seconds=3600)
    >>> cache.set("azure-local-release-info", "<html>...</html>")
    >>> cache.exists("azure-local-release-info")
    True

Expiry is checked lazily on read. Entries are process-local; run one
cache per worker.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Any, Protocol


class CacheBackend(Protocol):
    """Protocol for cache backend implementations."""

    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` if missing or expired."""
        ...

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        """Store a value with optional TTL (``None`` -> backend default)."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. No-op if absent."""
        ...

    def exists(self, key: str) -> bool:
        """True if key exists and has not expired."""
        ...

    def clear(self) -> None:
        """Remove all keys."""
        ...


class InMemoryCache:
    """Bounded in-memory cache with TTL support.

    Uses LRU eviction when ``max_size`` is reached.

    Example:
        cache = InMemoryCache(max_size=16, default_ttl_seconds=1800)
        cache.set("azure-local-solution-updates", markdown, ttl_seconds=1800)
    """

    def __init__(
        self,
        *,
        max_size: int = 64,
        default_ttl_seconds: int | None = 3600,
        clock=time.monotonic,
    ):
        self._store: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if expires_at is not None and self._clock() > expires_at:
                del self._store[key]
                return None

            self._store.move_to_end(key)
            return value

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        """Store a value with optional TTL."""
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = (self._clock() + ttl) if ttl else None

        with self._lock:
            if key not in self._store and len(self._store) >= self._max_size:
                self._store.popitem(last=False)
            self._store[key] = (value, expires_at)
            self._store.move_to_end(key)

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        with self._lock:
            self._store.pop(key, None)

    def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        return self.get(key) is not None

    def clear(self) -> None:
        """Remove all keys."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)
