"""Port for the service's self-diagnosis."""

from __future__ import annotations

from typing import Protocol

from spp_forecast.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self, probe_upstream: bool = True) -> SystemHealth:
        """
        Check configuration, caches and, unless ``probe_upstream`` is False,
        the reachability of the price API.
        """
        ...
