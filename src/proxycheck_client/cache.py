"""
In-memory response cache with per-entry expiration.
"""
import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Dict, Generic, List, Optional, TypeVar, Union

logger = logging.getLogger("proxycheck_client.cache")

T = TypeVar("T")

Ttl = Union[float, int, timedelta]


def _now_ms() -> int:
    return int(time.time() * 1000)


def ttl_to_ms(ttl: Ttl) -> int:
    """Convert a TTL in seconds (or a timedelta) to milliseconds."""
    if isinstance(ttl, timedelta):
        return int(ttl.total_seconds() * 1000)
    return int(ttl * 1000)


@dataclass
class CacheEntry(Generic[T]):
    """A cached value"""

    value: T
    """The cached value"""

    expires_at_ms: int
    """When this entry expires (Unix epoch milliseconds)"""

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expires_at_ms


class ResponseCache(Generic[T]):
    """
    Thread-safe key/value cache with absolute per-entry expiration.

    Expired entries are evicted lazily when read; there is no background
    sweep and reads never extend an entry's lifetime.

    Example:
        cache: ResponseCache[dict] = ResponseCache(name="ip")
        cache.put("GET https://...", {"status": "ok"}, ttl=300)
        value = cache.get("GET https://...")
    """

    def __init__(
        self,
        name: str = "default",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._name = name
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()
        self._clock = clock or _now_ms

    @property
    def name(self) -> str:
        return self._name

    def put(self, key: str, value: T, ttl: Ttl) -> None:
        """Store a value, replacing any existing entry for the key."""
        expires_at_ms = self._clock() + ttl_to_ms(ttl)
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at_ms=expires_at_ms)
        logger.debug(f"ResponseCache[{self._name}].put: key={key}, expires_at_ms={expires_at_ms}")

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if absent or expired."""
        now_ms = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now_ms):
                del self._entries[key]
                logger.debug(f"ResponseCache[{self._name}].get: evicted expired key={key}")
                return None
            return entry.value

    def remove(self, key: str) -> bool:
        """Remove an entry. Returns True if one was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
