"""
Application Layer Package

Orchestrates the flow of price data through the domain services and
shapes the results for the transport layer.
"""

from spp_forecast.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
