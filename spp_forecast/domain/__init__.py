"""
Domain Layer Package

Entities, pure services and the interfaces of external collaborators. Nothing
here depends on web frameworks or HTTP clients.
"""

# Re-export submodules
from spp_forecast.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]
