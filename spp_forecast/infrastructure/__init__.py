"""
Infrastructure Layer Package

Implementations of the domain interfaces that talk to the outside world:
the ERCOT public API, in-memory caches and health probes.
"""

from spp_forecast.infrastructure import cache, gateways, services

__all__ = ["cache", "gateways", "services"]
