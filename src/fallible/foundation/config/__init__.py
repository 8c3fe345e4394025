"""Configuration management using pydantic-settings."""

from .settings import FallibleSettings, LoggingSettings, clear_settings_cache, get_settings

__all__ = [
    "FallibleSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
