"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from time import perf_counter
from typing import Iterable, List, Optional

import httpx
import structlog

from spp_forecast.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from spp_forecast.domain.ports.health_check import IHealthCheckService
from spp_forecast.infrastructure.cache.ttl_cache import TTLCache

logger = structlog.get_logger(__name__)


class HealthCheckService(IHealthCheckService):
    """Report reachability of the ERCOT API and readiness of local components."""

    def __init__(
        self,
        ercot_api_url: str,
        credentials_configured: bool,
        subscription_key_configured: bool,
        caches: Optional[Iterable[TTLCache]] = None,
        *,
        http_timeout: float = 5.0,
    ) -> None:
        self._ercot_api_url = ercot_api_url
        self._credentials_configured = credentials_configured
        self._subscription_key_configured = subscription_key_configured
        self._caches = list(caches or [])
        self._http_timeout = http_timeout

    async def evaluate(self, probe_upstream: bool = True) -> SystemHealth:
        dependencies: List[DependencyStatus] = [self._check_credentials()]
        if probe_upstream:
            dependencies.append(await self._check_ercot_api())
        dependencies.append(self._check_caches())

        health = SystemHealth.from_dependencies(dependencies)
        if health.status is not ServiceStatus.UP:
            logger.warning(
                "health.degraded",
                status=health.status.value,
                failing=[
                    d.name for d in dependencies if d.status is not ServiceStatus.UP
                ],
            )
        return health

    def _check_credentials(self) -> DependencyStatus:
        missing = []
        if not self._credentials_configured:
            missing.append("ERCOT_USERNAME/ERCOT_PASSWORD")
        if not self._subscription_key_configured:
            missing.append("ERCOT_SUBSCRIPTION_KEY")

        if missing:
            return DependencyStatus(
                name="ercot_credentials",
                status=ServiceStatus.DOWN,
                message=f"Missing {', '.join(missing)}",
                details={"missing": missing},
            )
        return DependencyStatus(
            name="ercot_credentials",
            status=ServiceStatus.UP,
            message="ERCOT credentials configured",
        )

    async def _check_ercot_api(self) -> DependencyStatus:
        if not self._ercot_api_url:
            return DependencyStatus(
                name="ercot_api",
                status=ServiceStatus.UNKNOWN,
                message="ERCOT API URL not configured.",
            )

        url = self._ercot_api_url
        start = perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            return DependencyStatus(
                name="ercot_api",
                status=ServiceStatus.DOWN,
                message=f"HTTP request failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
                details={"url": url},
            )

        status_code = response.status_code

        # Unauthenticated probes get 401/404; that still proves reachability.
        if status_code >= 500:
            status = ServiceStatus.DOWN
        elif status_code == 429:
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.UP

        return DependencyStatus(
            name="ercot_api",
            status=status,
            message=f"HTTP {status_code}",
            latency_ms=(perf_counter() - start) * 1000,
            details={"url": url, "status_code": status_code},
        )

    def _check_caches(self) -> DependencyStatus:
        return DependencyStatus(
            name="cache",
            status=ServiceStatus.UP,
            message="In-memory caches available",
            details={cache.name: cache.stats() for cache in self._caches},
        )
