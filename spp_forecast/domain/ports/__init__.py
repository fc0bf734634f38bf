from .cache import ICache
from .health_check import IHealthCheckService

__all__ = ["ICache", "IHealthCheckService"]
