"""In-memory TTL cache with bounded capacity.

This cache is process-local. It is safe for concurrent access from threads
inside the same Python process, but it is not shared across workers/instances.
In distributed environments (multiple processes, containers, or machines), use
an external cache backend (e.g. Redis) if you need global coherence.

Eviction is FIFO: when the store is full, the oldest inserted entry goes first,
regardless of how recently it was read. Expired entries are dropped lazily on
read and in bulk by ``sweep_expired`` (see ``core.sweeper``).
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from core.errors import InvalidArgument

DEFAULT_CAPACITY = 5000
DEFAULT_TTL_SECONDS = 300.0


@dataclass
class CacheEntry:
    value: Any
    inserted_at: float
    ttl_seconds: float

    @property
    def expires_at(self) -> float:
        return self.inserted_at + self.ttl_seconds

    def is_live(self, now: float) -> bool:
        return now - self.inserted_at < self.ttl_seconds


@dataclass(frozen=True)
class CacheStats:
    size: int
    capacity: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
        }


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidArgument(f"cache key must be a non-empty string, got {key!r}")


class TTLCache:
    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        time_func: Callable[[], float] = time.monotonic,
    ):
        if capacity < 1:
            raise InvalidArgument(f"capacity must be >= 1, got {capacity}")
        if default_ttl_seconds <= 0:
            raise InvalidArgument(f"default_ttl_seconds must be > 0, got {default_ttl_seconds}")

        # dict keeps insertion order, which is the eviction order.
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._time_func = time_func
        self._capacity = capacity
        self._default_ttl_seconds = default_ttl_seconds
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl_seconds

    def now(self) -> float:
        return self._time_func()

    def get(self, key: str, default: Optional[Any] = None) -> Optional[Any]:
        _check_key(key)
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return default

            if not entry.is_live(self._time_func()):
                del self._store[key]
                self._expirations += 1
                self._misses += 1
                return default

            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        _check_key(key)
        if ttl_seconds is None or ttl_seconds <= 0:
            ttl_seconds = self._default_ttl_seconds

        with self._lock:
            if key in self._store:
                # overwrite: refresh position, never evict another key
                del self._store[key]
            elif len(self._store) >= self._capacity:
                oldest = next(iter(self._store))
                del self._store[oldest]
                self._evictions += 1

            self._store[key] = CacheEntry(
                value=value,
                inserted_at=self._time_func(),
                ttl_seconds=ttl_seconds,
            )

    def delete(self, key: str) -> bool:
        _check_key(key)
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def keys(self) -> list[str]:
        """Snapshot of the stored keys, expired-but-unswept ones included."""
        with self._lock:
            return list(self._store)

    def invalidate_matching(self, pattern: str) -> int:
        """Delete every key containing ``pattern`` and return how many went."""
        if not isinstance(pattern, str) or not pattern:
            raise InvalidArgument("invalidation pattern must be a non-empty string")

        removed = 0
        with self._lock:
            for key in self.keys():
                if pattern in key and self.delete(key):
                    removed += 1
        return removed

    def sweep_expired(self) -> int:
        """Force a full cleanup pass and return the number of removed keys."""
        with self._lock:
            now = self._time_func()
            expired_keys = [
                key for key, entry in self._store.items() if not entry.is_live(now)
            ]
            for key in expired_keys:
                del self._store[key]
            self._expirations += len(expired_keys)
            return len(expired_keys)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._store),
                capacity=self._capacity,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str) or not key:
            return False
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and entry.is_live(self._time_func())
