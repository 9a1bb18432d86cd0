"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from detection_api.api import create_api_application
from detection_api.config import AppSettings, RuntimeContext, config_create_runtime_context, config_load_settings
from detection_api.server import LifecycleManager


def bootstrap_create_application(context: RuntimeContext | None = None) -> FastAPI:
    """Assemble the ASGI application after validating startup configuration.

    Args:
        context: Optional pre-built runtime context; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_context = context or config_create_runtime_context(config_load_settings())
    return create_api_application(resolved_context)


def bootstrap_create_lifecycle_manager(settings: AppSettings | None = None) -> LifecycleManager:
    """Build the lifecycle manager serving a freshly assembled application.

    Args:
        settings: Optional validated settings; loaded from the environment when omitted.

    Returns:
        LifecycleManager: Manager ready to bind and serve.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    context = config_create_runtime_context(settings or config_load_settings())
    application = bootstrap_create_application(context)
    return LifecycleManager(application=application, context=context)
