"""
Shared configuration management for the GraphQL cache layer.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    service_name: str = Field(default="graphql-cache")

    # Transport
    fetch_timeout_seconds: float = Field(default=30.0, gt=0)

    # Observability
    enable_metrics: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_config() -> BaseConfig:
    """Get the process-wide configuration."""
    return BaseConfig()
