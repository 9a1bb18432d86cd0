"""Explicit, statically ordered interceptor chain for the API application."""

from __future__ import annotations

from enum import Enum
from typing import Final

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from detection_api.config import AppSettings

from .access_log import AccessLogMiddleware
from .body_parsing import BodyParsingMiddleware
from .error_boundary import ErrorBoundaryMiddleware
from .security_headers import SecurityHeadersMiddleware
from .static_files import StaticFilesMiddleware

CORS_ALLOWED_METHODS: Final[tuple[str, ...]] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CORS_ALLOWED_HEADERS: Final[tuple[str, ...]] = ("Content-Type", "Authorization", "X-Requested-With")


class MiddlewareCapability(str, Enum):
    """Capability tags naming each interceptor in the chain."""

    SECURITY_HEADERS = "security_headers"
    CORS = "cors"
    ACCESS_LOG = "access_log"
    ERROR_BOUNDARY = "error_boundary"
    BODY_PARSING = "body_parsing"
    STATIC_FILES = "static_files"


# Outermost first: a request visits the interceptors in this order.
API_MIDDLEWARE_ORDER: Final[tuple[MiddlewareCapability, ...]] = (
    MiddlewareCapability.SECURITY_HEADERS,
    MiddlewareCapability.CORS,
    MiddlewareCapability.ACCESS_LOG,
    MiddlewareCapability.ERROR_BOUNDARY,
    MiddlewareCapability.BODY_PARSING,
    MiddlewareCapability.STATIC_FILES,
)


def api_install_middleware_chain(
    application: FastAPI,
    settings: AppSettings,
    order: tuple[MiddlewareCapability, ...] = API_MIDDLEWARE_ORDER,
) -> None:
    """Install interceptors on the application in the given order.

    Starlette wraps each added middleware around the previously added ones,
    so the chain is registered in reverse to keep `order[0]` outermost.

    Args:
        application: Application receiving the interceptors.
        settings: Runtime settings for body limits, static directory and error rendering.
        order: Capability tags, outermost first. Each tag may appear once.

    Returns:
        None: Interceptors are registered on the application.

    Raises:
        ValueError: Raised when settings is None or the order repeats a capability.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if len(set(order)) != len(order):
        raise ValueError("middleware order must not repeat a capability")

    for capability in reversed(order):
        if capability is MiddlewareCapability.SECURITY_HEADERS:
            application.add_middleware(SecurityHeadersMiddleware)
        elif capability is MiddlewareCapability.CORS:
            application.add_middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_credentials=True,
                allow_methods=list(CORS_ALLOWED_METHODS),
                allow_headers=list(CORS_ALLOWED_HEADERS),
            )
        elif capability is MiddlewareCapability.ACCESS_LOG:
            application.add_middleware(AccessLogMiddleware)
        elif capability is MiddlewareCapability.ERROR_BOUNDARY:
            application.add_middleware(ErrorBoundaryMiddleware, settings=settings)
        elif capability is MiddlewareCapability.BODY_PARSING:
            application.add_middleware(BodyParsingMiddleware, limit_bytes=settings.body_limit_bytes)
        elif capability is MiddlewareCapability.STATIC_FILES:
            application.add_middleware(StaticFilesMiddleware, directory=settings.static_directory)
