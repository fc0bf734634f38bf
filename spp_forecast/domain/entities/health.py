"""
Health domain entities.

Value objects describing the availability of the service and of the
upstream price API it depends on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


# Worst first; the overall status is the worst dependency status.
_STATUS_SEVERITY = (
    ServiceStatus.DOWN,
    ServiceStatus.DEGRADED,
    ServiceStatus.UNKNOWN,
    ServiceStatus.UP,
)


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single dependency (upstream API, credentials, cache)."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the service."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, dependencies: Iterable[DependencyStatus]) -> "SystemHealth":
        checked = list(dependencies)
        present = {dependency.status for dependency in checked}
        overall = next(
            (status for status in _STATUS_SEVERITY if status in present),
            ServiceStatus.UP,
        )
        return cls(status=overall, dependencies=checked)


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    settlement_point: str
    market_timezone: str
    dependencies: List[DependencyStatus] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
