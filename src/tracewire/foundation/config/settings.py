"""Environment-based configuration using pydantic-settings.

Example:
    >>> from tracewire.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.propagation.key_prefix
    'tw-'

    # Or with environment variables:
    # TRACEWIRE_PROPAGATION_KEY_PREFIX=acme-
    # TRACEWIRE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRACEWIRE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class PropagationSettings(BaseSettings):
    """Carrier key layout and binary encoding."""

    model_config = SettingsConfigDict(
        env_prefix="TRACEWIRE_PROPAGATION_",
        extra="ignore",
    )

    key_prefix: str = Field(default="tw-", description="Namespace prepended to every text-map key")
    binary_codec: Literal["msgpack", "orjson"] = "msgpack"
    max_baggage_items: PositiveInt = Field(default=64, description="Inject refuses contexts with more baggage")

    @field_validator("key_prefix", mode="before")
    @classmethod
    def _lower_prefix(cls, v: str) -> str:
        """Prefix matching on read is case-insensitive, so keep it lowercase."""
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def ids_prefix(self) -> str:
        return f"{self.key_prefix}ids-"

    @computed_field
    @property
    def baggage_prefix(self) -> str:
        return f"{self.key_prefix}baggage-"


class TracewireSettings(BaseSettings):
    """Root settings, loaded from ``TRACEWIRE_`` environment variables and ``.env``.

    Example environment variables:
        TRACEWIRE_DEBUG=true
        TRACEWIRE_LOG_LEVEL=DEBUG
        TRACEWIRE_PROPAGATION_BINARY_CODEC=orjson
    """

    model_config = SettingsConfigDict(
        env_prefix="TRACEWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    service_name: str = "tracewire"

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    propagation: PropagationSettings = Field(default_factory=PropagationSettings)


@lru_cache(maxsize=1)
def get_settings() -> TracewireSettings:
    """Get the global settings instance (cached)."""
    return TracewireSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
