"""Central translation of unmatched routes and raised errors into JSON envelopes."""

from __future__ import annotations

import logging
import traceback
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from detection_api.config import AppSettings
from detection_api.domain import (
    ClientError,
    ErrorKind,
    ServerError,
    ServiceError,
    domain_build_error_payload,
    domain_build_not_found_payload,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_LABEL = "Internal Server Error"
DEFAULT_SERVER_ERROR_MESSAGE = "An unexpected error occurred on the server"
_NOT_FOUND_STATUS_CODES = frozenset({status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED})


def api_classify_error(error: BaseException) -> ServiceError:
    """Map any raised error onto the typed error taxonomy.

    Args:
        error: Error raised by an interceptor or route handler.

    Returns:
        ServiceError: Client or server error carrying the response status code.
    """

    if isinstance(error, ServiceError):
        if error.kind is ErrorKind.STARTUP:
            return ServerError(error.message)
        return error
    if isinstance(error, RequestValidationError):
        return ClientError(str(error), status_code=HTTPStatus.UNPROCESSABLE_ENTITY.value)
    if isinstance(error, StarletteHTTPException):
        message = str(error.detail)
        if 400 <= error.status_code < 500:
            return ClientError(message, status_code=error.status_code)
        if 500 <= error.status_code < 600:
            return ServerError(message, status_code=error.status_code)
        return ServerError(message)
    return ServerError(str(error) or DEFAULT_SERVER_ERROR_MESSAGE)


def api_error_response(error: BaseException, settings: AppSettings) -> JSONResponse:
    """Log a failure and render its JSON error envelope.

    Args:
        error: Error raised while processing a request.
        settings: Runtime settings deciding whether a stack trace is exposed.

    Returns:
        JSONResponse: Error envelope with the resolved status code.
    """

    service_error = api_classify_error(error)
    logger.error(
        "Request failed with status %d: %s",
        service_error.status_code,
        service_error.message,
        exc_info=(type(error), error, error.__traceback__),
    )

    stack = None
    if settings.environment_is_development:
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))

    payload = domain_build_error_payload(
        label=SERVER_ERROR_LABEL,
        message=service_error.message or DEFAULT_SERVER_ERROR_MESSAGE,
        stack=stack,
    )
    return JSONResponse(content=payload, status_code=service_error.status_code)


def api_not_found_response(method: str, path: str) -> JSONResponse:
    """Render the Not-Found envelope for an unmatched method and path."""

    return JSONResponse(
        content=domain_build_not_found_payload(method=method, path=path),
        status_code=status.HTTP_404_NOT_FOUND,
    )


def api_register_error_handlers(application: FastAPI, settings: AppSettings) -> None:
    """Register framework exception handlers that delegate to the envelope translator.

    Routing misses (404) and unsupported methods on known paths (405) both
    render the Not-Found envelope. Every other framework exception goes
    through `api_error_response`.

    Args:
        application: Application receiving the handlers.
        settings: Runtime settings used for stack trace exposure.

    Returns:
        None: Handlers are registered on the application.

    Raises:
        ValueError: Raised when settings is None.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    async def api_handle_http_exception(request: Request, error: StarletteHTTPException) -> JSONResponse:
        if error.status_code in _NOT_FOUND_STATUS_CODES:
            return api_not_found_response(method=request.method, path=request.url.path)
        return api_error_response(error, settings)

    async def api_handle_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
        _ = request
        return api_error_response(error, settings)

    application.add_exception_handler(StarletteHTTPException, api_handle_http_exception)
    application.add_exception_handler(RequestValidationError, api_handle_validation_error)
