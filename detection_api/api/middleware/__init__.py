"""ASGI interceptors composing the request processing chain."""

from .access_log import AccessLogMiddleware
from .body_parsing import PARSED_BODY_STATE_KEY, BodyParsingMiddleware
from .chain import API_MIDDLEWARE_ORDER, MiddlewareCapability, api_install_middleware_chain
from .error_boundary import ErrorBoundaryMiddleware
from .security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware
from .static_files import StaticFilesMiddleware

__all__ = [
    "API_MIDDLEWARE_ORDER",
    "PARSED_BODY_STATE_KEY",
    "SECURITY_HEADERS",
    "AccessLogMiddleware",
    "BodyParsingMiddleware",
    "ErrorBoundaryMiddleware",
    "MiddlewareCapability",
    "SecurityHeadersMiddleware",
    "StaticFilesMiddleware",
    "api_install_middleware_chain",
]
