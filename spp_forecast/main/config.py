"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spp_forecast.infrastructure.gateways.ercot_auth import (
    DEFAULT_CLIENT_ID,
    DEFAULT_TOKEN_URL,
)
from spp_forecast.infrastructure.gateways.ercot_client import DEFAULT_API_BASE_URL
from spp_forecast.shared import (
    DEFAULT_MARKET_TIMEZONE,
    DEFAULT_SETTLEMENT_POINT,
    EnumEnvironment,
    EnumLogLevel,
)
from spp_forecast.shared.env import load_secret_file_variables  # noqa: F401


class GESettings(BaseSettings):
    """Service identity and server configuration settings."""

    title: str = Field(default="SPP Forecast", description="Service title")
    description: str = Field(
        default="Seasonal forecast of ERCOT 15-minute settlement point prices",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class ErcotSettings(BaseSettings):
    """ERCOT public API configuration settings."""

    username: Optional[str] = Field(default=None, description="ERCOT API username")
    password: Optional[str] = Field(default=None, description="ERCOT API password")
    subscription_key: Optional[str] = Field(
        default=None, description="ERCOT API portal subscription key"
    )
    client_id: str = Field(
        default=DEFAULT_CLIENT_ID, description="OAuth client id of the public API"
    )
    token_url: str = Field(
        default=DEFAULT_TOKEN_URL, description="Identity provider token endpoint"
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL, description="Public reports base URL"
    )
    settlement_point: str = Field(
        default=DEFAULT_SETTLEMENT_POINT, description="Settlement point to forecast"
    )
    market_timezone: str = Field(
        default=DEFAULT_MARKET_TIMEZONE,
        description="IANA timezone of ERCOT delivery dates",
    )
    token_timeout: float = Field(
        default=12.0, gt=0, description="Token request timeout in seconds"
    )
    api_timeout: float = Field(
        default=15.0, gt=0, description="API request timeout in seconds"
    )
    max_attempts: int = Field(
        default=2, ge=1, description="Attempts per API request, retries included"
    )
    backoff_seconds: float = Field(
        default=0.3, ge=0, description="Retry back-off, multiplied by the attempt"
    )
    page_size: int = Field(
        default=2000, ge=1, description="Rows requested per report page"
    )

    model_config = SettingsConfigDict(
        env_prefix="ERCOT_", case_sensitive=False, extra="ignore"
    )

    @field_validator("settlement_point")
    @classmethod
    def _upper_settlement_point(cls, value: str) -> str:
        return value.strip().upper()


class ForecastSettings(BaseSettings):
    """Forecast engine and response caching settings."""

    weeks_lookback: int = Field(
        default=4, ge=1, description="Same-weekday weeks averaged per slot"
    )
    horizon_days: int = Field(
        default=7, ge=0, description="Days after today a forecast can be requested"
    )
    response_cache_ttl_seconds: float = Field(
        default=600.0, gt=0, description="Lifetime of cached forecast responses"
    )
    day_cache_ttl_seconds: float = Field(
        default=3600.0, gt=0, description="Lifetime of cached ERCOT day rows"
    )
    mape_epsilon: float = Field(
        default=1e-6, gt=0, description="Actual magnitude below which MAPE skips"
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class DashboardSettings(BaseSettings):
    """Streamlit dashboard settings."""

    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the forecast API the dashboard reads from",
    )
    request_timeout: float = Field(
        default=15.0, gt=0, description="Timeout of one API call in seconds"
    )
    refresh_seconds: int = Field(
        default=60, ge=0, description="How long fetched forecasts are reused"
    )
    port: int = Field(default=8501, description="Port of the dashboard server")

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    ge: GESettings = Field(default_factory=GESettings)
    ercot: ErcotSettings = Field(default_factory=ErcotSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()
