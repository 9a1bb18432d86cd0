"""FastAPI application factory for the Deepfake Detection API server.

This module composes the interceptor chain, error handlers and routers into
one application instance.
"""

from fastapi import FastAPI

from detection_api.config import RuntimeContext
from detection_api.domain import SERVER_NAME, SERVER_VERSION

from .errors import api_register_error_handlers
from .middleware import API_MIDDLEWARE_ORDER, MiddlewareCapability, api_install_middleware_chain
from .routers import api_create_health_router, api_create_info_router, api_create_landing_router

API_PREFIX = "/api"


def create_api_application(
    context: RuntimeContext,
    middleware_order: tuple[MiddlewareCapability, ...] = API_MIDDLEWARE_ORDER,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    The generated documentation routes are disabled so that only the landing
    page and the two API endpoints are routable. Slash redirects are disabled;
    routers register their own trailing-slash variants.

    Args:
        context: Runtime context shared read-only by every handler.
        middleware_order: Interceptor capabilities, outermost first.

    Returns:
        FastAPI: Fully composed application.

    Raises:
        ValueError: Raised when context is None.
    """

    if context is None:
        raise ValueError("context must not be None")

    application = FastAPI(
        title=SERVER_NAME,
        version=SERVER_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    api_install_middleware_chain(application, context.settings, order=middleware_order)
    api_register_error_handlers(application, context.settings)

    application.include_router(api_create_landing_router(context))
    application.include_router(api_create_health_router(context), prefix=API_PREFIX)
    application.include_router(api_create_info_router(context), prefix=API_PREFIX)

    return application
