"""Provider settings and configuration errors."""

from .settings import (
    ConfigurationError,
    MissingCredentialError,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "ConfigurationError",
    "MissingCredentialError",
    "Settings",
    "get_settings",
    "load_settings",
]
