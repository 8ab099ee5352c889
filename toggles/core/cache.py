"""
Generic in-memory cache with TTL support.
Thread-safe and suitable for L1 caching.
Any object satisfying CacheInterface (e.g. a Redis adapter) can be injected instead.
"""
import logging
import time
from threading import Lock
from typing import Dict, Generic, Optional, Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class CacheInterface(Protocol[T]):
    """Contract for pluggable cache backends."""

    def get(self, key: str) -> Optional[T]:
        """Get value by key, returns None if not found or expired."""
        ...

    def set(self, key: str, value: T, ttl_seconds: Optional[float] = None) -> None:
        """Set value with optional TTL."""
        ...

    def delete(self, key: str) -> bool:
        """Delete key, returns True if existed."""
        ...

    def clear(self) -> None:
        """Clear all entries."""
        ...

    def clear_expired(self) -> int:
        """Remove expired entries, return count removed."""
        ...

    def size(self) -> int:
        """Return number of stored entries."""
        ...


class CacheEntry(Generic[T]):
    """Single cache entry with expiration tracking."""

    def __init__(self, value: T, expires_at: Optional[float]) -> None:
        self.value = value
        self.expires_at = expires_at

    def is_expired(self) -> bool:
        """Check if entry has expired."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at


class InMemoryCache(Generic[T]):
    """
    Thread-safe in-memory cache with TTL support.

    Entries written without a TTL (and with no default TTL configured)
    never expire. Expired entries are evicted lazily on `get` or eagerly
    by `clear_expired`; until then they still count towards `size`.

    Usage:
        cache: CacheInterface[bool] = InMemoryCache(default_ttl_seconds=300)
        cache.set("flag:123", True)
    """

    def __init__(self, default_ttl_seconds: Optional[float] = None) -> None:
        self._store: Dict[str, CacheEntry[T]] = {}
        self._default_ttl = default_ttl_seconds
        self._lock = Lock()

    def get(self, key: str) -> Optional[T]:
        """Get value by key, returns None if not found or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired():
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: T, ttl_seconds: Optional[float] = None) -> None:
        """Set value with optional TTL."""
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = time.time() + ttl if ttl is not None else None
        with self._lock:
            self._store[key] = CacheEntry(value, expires_at)

    def delete(self, key: str) -> bool:
        """Delete key, returns True if existed."""
        with self._lock:
            if key in self._store:
                del self._store[key]
                return True
            return False

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Return number of entries (including possibly expired)."""
        with self._lock:
            return len(self._store)

    def clear_expired(self) -> int:
        """Remove expired entries, return count removed."""
        removed = 0
        with self._lock:
            expired_keys = [
                k for k, v in self._store.items() if v.is_expired()
            ]
            for key in expired_keys:
                del self._store[key]
                removed += 1
        if removed:
            logger.debug(f"Evicted {removed} expired cache entries")
        return removed
