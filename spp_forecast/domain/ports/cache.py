"""Port for short-lived key/value caches."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Protocol


class ICache(Protocol):
    """Cache with per-entry time-to-live."""

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        ...

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store ``value`` under ``key``."""
        ...

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        """Return the cached value or compute, store and return it."""
        ...
