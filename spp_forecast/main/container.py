"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from spp_forecast.application.models import SystemInfo
from spp_forecast.application.use_cases.forecast_use_cases import (
    GetDailyForecastUseCase,
    GetSelectableDatesUseCase,
)
from spp_forecast.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from spp_forecast.infrastructure.cache import TTLCache
from spp_forecast.infrastructure.gateways import (
    ErcotApiClient,
    ErcotPriceGateway,
    ErcotTokenProvider,
    TokenCache,
)
from spp_forecast.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from spp_forecast.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _is_set(*values) -> bool:
    return all(bool(value) for value in values)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    day_cache = providers.Singleton(
        TTLCache,
        default_ttl_seconds=config.forecast.day_cache_ttl_seconds,
        name="ercot_day_rows",
    )

    response_cache = providers.Singleton(
        TTLCache,
        default_ttl_seconds=config.forecast.response_cache_ttl_seconds,
        name="forecast_responses",
    )

    token_cache = providers.Singleton(TokenCache)

    token_provider = providers.Singleton(
        ErcotTokenProvider,
        username=config.ercot.username,
        password=config.ercot.password,
        token_cache=token_cache,
        client_id=config.ercot.client_id,
        token_url=config.ercot.token_url,
        timeout=config.ercot.token_timeout,
    )

    ercot_api_client = providers.Singleton(
        ErcotApiClient,
        token_provider=token_provider,
        subscription_key=config.ercot.subscription_key,
        base_url=config.ercot.api_base_url,
        timeout=config.ercot.api_timeout,
        max_attempts=config.ercot.max_attempts,
        backoff_seconds=config.ercot.backoff_seconds,
    )

    # Gateways
    price_gateway = providers.Singleton(
        ErcotPriceGateway,
        api_client=ercot_api_client,
        settlement_point=config.ercot.settlement_point,
        market_timezone=config.ercot.market_timezone,
        day_cache=day_cache,
        page_size=config.ercot.page_size,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        ercot_api_url=config.ercot.api_base_url,
        credentials_configured=providers.Callable(
            _is_set, config.ercot.username, config.ercot.password
        ),
        subscription_key_configured=providers.Callable(
            _is_set, config.ercot.subscription_key
        ),
        caches=providers.List(day_cache, response_cache),
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        settlement_point=config.ercot.settlement_point,
        market_timezone=config.ercot.market_timezone,
        weeks_lookback=config.forecast.weeks_lookback,
        horizon_days=config.forecast.horizon_days,
        ercot_api_url=config.ercot.api_base_url,
        ercot_token_url=config.ercot.token_url,
    )

    # Application (use cases)
    get_daily_forecast_use_case = providers.Factory(
        GetDailyForecastUseCase,
        price_gateway=price_gateway,
        response_cache=response_cache,
        market_timezone=config.ercot.market_timezone,
        weeks_lookback=config.forecast.weeks_lookback,
        horizon_days=config.forecast.horizon_days,
        mape_epsilon=config.forecast.mape_epsilon,
    )

    get_selectable_dates_use_case = providers.Factory(
        GetSelectableDatesUseCase,
        market_timezone=config.ercot.market_timezone,
        horizon_days=config.forecast.horizon_days,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management of the in-memory resources.

    Caches live for the lifetime of the process; they are emptied on
    shutdown so a reloaded application starts from ERCOT again.
    """
    container = get_container()

    day_cache = container.day_cache()
    response_cache = container.response_cache()

    try:
        logger.info(
            "container.resources.initialized",
            settlement_point=container.config.ercot.settlement_point(),
            ercot_credentials=container.token_provider().is_configured,
        )
        yield container

    finally:
        logger.info(
            "container.caches.clear",
            day_cache=day_cache.stats(),
            response_cache=response_cache.stats(),
        )
        day_cache.clear()
        response_cache.clear()
        container.token_cache().clear()

        logger.info("container.resources.shutdown")
