"""Foundation: failure taxonomy and configuration."""

from .config import FallibleSettings, LoggingSettings, clear_settings_cache, get_settings
from .errors import FailureInfo, Recoverable, UnwrapError

__all__ = [
    "FallibleSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
    "FailureInfo",
    "Recoverable",
    "UnwrapError",
]
