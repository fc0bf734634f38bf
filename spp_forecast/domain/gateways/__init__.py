"""
Gateways Package - Domain Layer

Interfaces for external data sources. Implementations live in the
infrastructure layer.
"""

from .price_history_gateway import IPriceHistoryGateway

__all__ = ["IPriceHistoryGateway"]
