from __future__ import annotations

from datetime import datetime, timezone

from spp_forecast.application.dtos.health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
)
from spp_forecast.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


def test_dependency_status_dto_from_domain() -> None:
    domain = DependencyStatus(name="ercot_api", status=ServiceStatus.UP)
    dto = DependencyStatusDTO.from_domain(domain)
    assert dto.name == "ercot_api"
    assert dto.status is ServiceStatus.UP


def test_system_health_dto_from_domain() -> None:
    domain = SystemHealth(status=ServiceStatus.UP, dependencies=[])
    dto = SystemHealthDTO.from_domain(domain)
    assert dto.status is ServiceStatus.UP
    assert dto.dependencies == []


def test_application_info_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    info = ApplicationInfo(
        name="SPP Forecast",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2026-02-01",
        started_at=now,
        uptime_seconds=42.0,
        status=ServiceStatus.UP,
        settlement_point="HB_WEST",
        market_timezone="America/Chicago",
        dependencies=[DependencyStatus(name="cache", status=ServiceStatus.UP)],
        extras={"foo": "bar"},
    )

    dto = ApplicationInfoDTO.from_domain(info)
    assert dto.name == "SPP Forecast"
    assert dto.status is ServiceStatus.UP
    assert dto.settlement_point == "HB_WEST"
    assert dto.extras == {"foo": "bar"}
    assert isinstance(dto.dependencies[0], DependencyStatusDTO)
    assert dto.dependencies[0].name == "cache"
