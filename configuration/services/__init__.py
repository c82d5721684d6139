"""Domain services for the configuration app."""

from .system_config import (
    DEFAULT_SYSTEM_SETTINGS,
    SystemSettings,
    get_max_login_attempts,
    get_system_config,
)

__all__ = [
    "DEFAULT_SYSTEM_SETTINGS",
    "SystemSettings",
    "get_max_login_attempts",
    "get_system_config",
]
