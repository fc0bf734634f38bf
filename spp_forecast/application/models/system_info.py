"""Settings snapshot consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Configuration values reported by /info."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    settlement_point: str
    market_timezone: str
    weeks_lookback: int
    horizon_days: int
    ercot_api_url: str
    ercot_token_url: str
