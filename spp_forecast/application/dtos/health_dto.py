"""Response models of /health and /info."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from spp_forecast.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)

_ERCOT_API_EXAMPLE = {
    "name": "ercot_api",
    "status": "up",
    "message": "HTTP 401",
    "checked_at": "2026-02-17T15:00:00Z",
    "latency_ms": 84.2,
    "details": {
        "url": "https://api.ercot.com/api/public-reports",
        "status_code": 401,
    },
}


class DependencyStatusDTO(BaseModel):
    """One check: credentials, the ERCOT API or the local caches."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(description="Check identifier")
    status: ServiceStatus
    message: Optional[str] = Field(default=None, description="Short explanation")
    checked_at: datetime
    latency_ms: Optional[float] = Field(
        default=None, description="Round trip of the upstream probe"
    )
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls.model_validate(status)


class SystemHealthDTO(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"status": "up", "dependencies": [_ERCOT_API_EXAMPLE]}
        },
    )

    status: ServiceStatus = Field(description="Worst status among the checks")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls.model_validate(health)


class ApplicationInfoDTO(BaseModel):
    """Build metadata, uptime and the market the service forecasts."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "name": "SPP Forecast",
                "description": "Seasonal forecast of ERCOT settlement point prices",
                "version": "1.0.0",
                "environment": "production",
                "git_commit": "3f2c9d1",
                "build_time": "2026-02-16T22:10:00Z",
                "started_at": "2026-02-17T06:00:00Z",
                "uptime_seconds": 32400.0,
                "status": "up",
                "settlement_point": "HB_WEST",
                "market_timezone": "America/Chicago",
                "dependencies": [_ERCOT_API_EXAMPLE],
                "extras": {
                    "data_mode": "ercot-np6-905",
                    "forecast": {"weeks_lookback": 4, "horizon_days": 7},
                },
            }
        },
    )

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    settlement_point: str = Field(description="Settlement point being forecast")
    market_timezone: str = Field(description="Timezone of delivery dates")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls.model_validate(info)
