"""Time-bounded content cache.

Values are fetched through a caller-supplied function on a miss and
reused until their TTL runs out. Only time-based invalidation applies:
there is no size bound and no LRU eviction.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar, cast

import structlog

from display_resources.duration import parse_duration
from display_resources.types import CacheEntry, Duration, Fetcher

T = TypeVar("T")

logger = structlog.get_logger(__name__)


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class _InFlight:
    """A fetch in progress that other callers may wait on."""

    __slots__ = ("done", "error", "value")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None


class ContentCache(Generic[T]):
    """Thread-safe key-value cache with a fixed time-to-live.

    A failed fetch stores nothing, so the next lookup retries. Fetches run
    outside the cache lock: a slow read for one key never blocks lookups
    of other keys.
    """

    def __init__(
        self,
        ttl: Duration,
        *,
        clock: Callable[[], int] | None = None,
        single_flight: bool = False,
    ) -> None:
        """Create a cache.

        Args:
            ttl: How long a fetched value stays valid before the next
                lookup re-fetches it
            clock: Millisecond clock, defaults to a monotonic one
            single_flight: Share one fetch between concurrent misses
                on the same key
        """
        self._ttl = parse_duration(ttl)
        self._clock = clock or _monotonic_ms
        self._single_flight = single_flight
        self._entries: dict[str, CacheEntry[T]] = {}
        self._in_flight: dict[str, _InFlight] = {}
        self._lock = threading.Lock()

    @property
    def ttl_ms(self) -> int:
        """Configured time-to-live in milliseconds."""
        return self._ttl

    def get_or_fetch(self, key: str, fetch: Fetcher[T]) -> T:
        """Return the cached value for key, fetching it if missing or stale.

        Args:
            key: Cache key
            fetch: Called exactly once per miss to produce the value

        Returns:
            Cached or freshly fetched value

        Raises:
            Whatever ``fetch`` raises; nothing is cached in that case
        """
        value = self.get(key)
        if value is not None:
            logger.debug("Cache hit", key=key)
            return value

        logger.debug("Cache miss", key=key)
        if self._single_flight:
            return self._coalesce(key, fetch)
        return self._fetch_and_store(key, fetch)

    def get(self, key: str) -> T | None:
        """Return a fresh cached value, or None. Never fetches."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.is_expired(self._clock()):
                return None
            return entry.value

    def invalidate(self, key: str) -> None:
        """Drop the entry for key, if any."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def evict_stale(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            stale = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Evicted stale entries", count=len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for e in self._entries.values() if not e.is_expired(now))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _fetch_and_store(self, key: str, fetch: Fetcher[T]) -> T:
        value = fetch()
        self._store(key, value)
        return value

    def _store(self, key: str, value: T) -> None:
        with self._lock:
            now = self._clock()
            # Last completed fetch wins
            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                created_at=now,
                expires_at=now + self._ttl,
            )
        logger.debug("Cache store", key=key, ttl_ms=self._ttl)

    def _coalesce(self, key: str, fetch: Fetcher[T]) -> T:
        """Coalesce concurrent misses for the same key into one fetch."""
        with self._lock:
            pending = self._in_flight.get(key)
            waiting = pending is not None
            if pending is None:
                pending = _InFlight()
                self._in_flight[key] = pending

        if waiting:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return cast(T, pending.value)

        try:
            pending.value = self._fetch_and_store(key, fetch)
            return cast(T, pending.value)
        except BaseException as e:
            pending.error = e
            raise
        finally:
            with self._lock:
                del self._in_flight[key]
            pending.done.set()
