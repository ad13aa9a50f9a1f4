"""
Shared configuration management for the AciTracker Gateway.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_UPSTREAM_BASE = "https://acitracker-backend.onrender.com"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Observability
    metrics_port: Optional[int] = Field(default=None, ge=1, le=65535)


class GatewayConfig(BaseConfig):
    """Gateway configuration, read once at startup."""

    service_name: str = "gateway"
    host: str = "0.0.0.0"
    port: int = Field(default=10000, ge=1, le=65535)

    # Security
    gateway_bearer_token: Optional[str] = Field(default=None, repr=False)

    # Upstream
    upstream_base: str = Field(default=DEFAULT_UPSTREAM_BASE)
    upstream_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # Caching
    cache_ttl_ms: int = Field(default=30000, ge=0)
    single_flight: bool = Field(default=False)

    # Request limits
    max_header_size: int = Field(default=8192, gt=0)

    @property
    def bearer_token_configured(self) -> bool:
        return bool(self.gateway_bearer_token)


def get_config(**overrides) -> GatewayConfig:
    """Get gateway configuration from the environment, with explicit overrides."""
    return GatewayConfig(**overrides)
