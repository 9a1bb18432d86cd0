"""Configuration package for runtime settings, logging, and startup context."""

from .logging_setup import config_configure_logging
from .runtime import RuntimeContext, config_create_runtime_context
from .settings import AppSettings, SettingsLoadError, config_load_settings

__all__ = [
    "AppSettings",
    "RuntimeContext",
    "SettingsLoadError",
    "config_configure_logging",
    "config_create_runtime_context",
    "config_load_settings",
]
