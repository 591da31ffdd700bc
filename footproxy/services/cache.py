"""In-memory TTL cache for upstream resources, with a background sweep."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Any, Callable, NamedTuple

log = logging.getLogger(__name__)

LEAGUES = "leagues"
TEAMS = "teams"
LIVE_SCORES = "liveScores"
FIXTURES = "fixtures"

DEFAULT_TTL = 900


class CacheEntry(NamedTuple):
    value: Any
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


class TTLCache:
    """Thread-safe in-memory cache with a default TTL.

    Entries are replaced whole on every set; get checks expiry itself, so
    the periodic sweep only reclaims memory.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.expired(self._clock()):
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        entry = CacheEntry(value, self._clock(), self.default_ttl if ttl is None else ttl)
        with self._lock:
            self._store[key] = entry

    def age(self, key: str) -> float | None:
        """Seconds since key was stored, or None if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            now = self._clock()
            if entry is None or entry.expired(now):
                return None
            return now - entry.stored_at

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number evicted."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._store.items() if e.expired(now)]
            for key in expired:
                del self._store[key]
        return len(expired)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


async def run_sweeper(cache: TTLCache, period: float, stop: asyncio.Event) -> None:
    """Sweep cache every period seconds until stop is set."""
    while not stop.is_set():
        try:
            await asyncio.wait_for(stop.wait(), timeout=period)
        except asyncio.TimeoutError:
            evicted = cache.sweep()
            if evicted:
                log.debug("Swept %d expired cache entries", evicted)
