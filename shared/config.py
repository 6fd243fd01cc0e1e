"""
Shared configuration management for the pickup catalog client.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATALOG_URL = "https://static-basket-01.wb.ru/vol0/data/all-poo-fr-v8.json"
DEFAULT_TTL_SECONDS = 5 * 60
DEFAULT_TIMEOUT_SECONDS = 10.0


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class CatalogSettings(BaseConfig):
    """Catalog client settings, read from ``CATALOG_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    url: str = Field(default=DEFAULT_CATALOG_URL)
    ttl_seconds: float = Field(default=DEFAULT_TTL_SECONDS, ge=0)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)


def get_settings(**overrides) -> CatalogSettings:
    """Load catalog settings, applying explicit overrides over the environment."""
    return CatalogSettings(**overrides)
