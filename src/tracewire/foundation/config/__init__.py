"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    PropagationSettings,
    TracewireSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "PropagationSettings",
    "TracewireSettings",
    "clear_settings_cache",
    "get_settings",
]
