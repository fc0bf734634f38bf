"""Use cases behind the /health and /info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

from spp_forecast.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from spp_forecast.application.models import SystemInfo
from spp_forecast.domain.entities.health import ApplicationInfo
from spp_forecast.domain.ports.health_check import IHealthCheckService
from spp_forecast.shared.consts import DATA_MODE


def strip_credentials(url: str) -> str:
    """Drop ``user:password@`` from a URL before it is published."""
    if not url:
        return url
    parts = urlsplit(url)
    if not (parts.username or parts.password):
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return parts._replace(netloc=netloc).geturl()


class GetHealthStatusUseCase:
    """Returns the aggregated health; liveness checks skip the ERCOT probe."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self, probe_upstream: bool = True) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate(probe_upstream)
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Build, uptime and market metadata plus a health snapshot."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            status=system_health.status,
            settlement_point=self._info.settlement_point,
            market_timezone=self._info.market_timezone,
            dependencies=system_health.dependencies,
            extras={
                "environment": self._info.environment,
                "data_mode": DATA_MODE,
                "forecast": {
                    "weeks_lookback": self._info.weeks_lookback,
                    "horizon_days": self._info.horizon_days,
                },
                "ercot": {
                    "api_url": strip_credentials(self._info.ercot_api_url),
                    "token_url": strip_credentials(self._info.ercot_token_url),
                },
            },
        )

        return ApplicationInfoDTO.from_domain(info)
