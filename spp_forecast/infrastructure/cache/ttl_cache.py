"""
In-memory TTL cache.

One instance holds upstream day rows, another holds assembled forecast
responses. Instances are created by the container and injected where needed.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class CacheEntry:
    """A cached value and the monotonic time it expires at."""

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class TTLCache:
    """
    Dictionary-backed cache with per-entry time-to-live.

    Expired entries are evicted lazily on read. ``get_or_set`` implements the
    cache-aside pattern and makes concurrent fills of the same key share one
    upstream call.
    """

    def __init__(
        self,
        default_ttl_seconds: float,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")
        self.name = name
        self.default_ttl_seconds = float(default_ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._fill_locks: Dict[str, asyncio.Lock] = {}
        self._hits = 0
        self._misses = 0
        self.logger = logger.bind(cache=name)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            self._misses += 1
            self.logger.debug("cache.expired", key=key)
            return None

        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else float(ttl_seconds)
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
        self._fill_locks.clear()

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        """
        Return the cached value for ``key`` or await ``factory`` to fill it.

        Exceptions from ``factory`` propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            self.logger.debug("cache.hit", key=key)
            return cached

        lock = self._fill_locks.setdefault(key, asyncio.Lock())
        try:
            async with lock:
                # Another task may have filled it while we waited.
                entry = self._entries.get(key)
                if entry is not None and not entry.is_expired(self._clock()):
                    self._hits += 1
                    return entry.value

                self.logger.debug("cache.miss", key=key)
                value = await factory()
                if value is not None:
                    self.set(key, value, ttl_seconds)
        finally:
            self._fill_locks.pop(key, None)

        return value

    def stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        return {
            "name": self.name,
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 4) if total else 0.0,
        }
