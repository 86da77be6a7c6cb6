"""Thread-safe mapping with per-entry expiry.

Readers never see expired entries; eviction is lazy on read, and ``purge()``
sweeps everything that has expired.

Usage example:
    cache: TTLCache[str, str] = TTLCache()
    body = cache.get_or_add(url, lambda: fetched_body, ttl=30.0)
    body, found = cache.try_get(url)
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """Cached value with its creation time and time-to-live."""

    value: V
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now > self.created_at + self.ttl


class TTLCache(Generic[K, V]):
    """Key-value cache where every entry expires independently."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def try_get(self, key: K) -> tuple[V | None, bool]:
        """Return ``(value, True)`` for a live entry, ``(None, False)`` otherwise."""
        with self._lock:
            entry = self._live_entry(key)
        if entry is None:
            return None, False
        return entry.value, True

    def get_or_add(self, key: K, factory: Callable[[], V], ttl: float) -> V:
        """Return the live value for ``key``, computing and publishing it if absent.

        ``factory`` runs outside the lock, so concurrent callers may race to
        compute. The first entry published wins and every later caller gets it.
        """
        _check_ttl(ttl)
        with self._lock:
            entry = self._live_entry(key)
        if entry is not None:
            return entry.value

        value = factory()
        with self._lock:
            entry = self._live_entry(key)
            if entry is not None:
                return entry.value
            self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=ttl)
        return value

    def set(self, key: K, value: V, ttl: float) -> None:
        """Publish ``value`` for ``key``, replacing any existing entry."""
        _check_ttl(ttl)
        entry = CacheEntry(value=value, created_at=self._clock(), ttl=ttl)
        with self._lock:
            self._entries[key] = entry

    def purge(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return self._live_entry(key) is not None  # type: ignore[arg-type]

    def _live_entry(self, key: K) -> CacheEntry[V] | None:
        # Caller holds the lock
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry


def _check_ttl(ttl: float) -> None:
    if ttl <= 0:
        raise ValueError(f"ttl must be positive, got {ttl}")
