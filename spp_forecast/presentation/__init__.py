"""
Presentation Layer Package

HTTP transport of the forecast service: routers and their error mapping.
"""

from spp_forecast.presentation import controllers

__all__ = ["controllers"]
