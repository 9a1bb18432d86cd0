"""Project-native typed exceptions for request and startup failures."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories translated by the central error handler."""

    CLIENT = "client"
    SERVER = "server"
    STARTUP = "startup"


class ServiceError(Exception):
    """Base exception carrying an error kind and HTTP status code.

    Attributes:
        kind: Failure category.
        status_code: HTTP status code surfaced to callers.
    """

    kind: ErrorKind = ErrorKind.SERVER
    default_status_code: int = 500
    _status_range: tuple[int, int] = (500, 599)

    def __init__(self, message: str, status_code: int | None = None):
        resolved_status_code = self.default_status_code if status_code is None else status_code
        lower_bound, upper_bound = self._status_range
        if not lower_bound <= resolved_status_code <= upper_bound:
            raise ValueError(
                f"status_code {resolved_status_code} is outside {lower_bound}-{upper_bound} "
                f"for {self.kind.value} errors"
            )
        super().__init__(message)
        self.message = message
        self.status_code = resolved_status_code


class ClientError(ServiceError):
    """Caller-caused failure surfaced with a 4xx status."""

    kind = ErrorKind.CLIENT
    default_status_code = 400
    _status_range = (400, 499)


class MalformedBodyError(ClientError):
    """Request body could not be decoded for its declared content type."""


class PayloadTooLargeError(ClientError):
    """Request body exceeded the configured size ceiling."""

    default_status_code = 413


class ServerError(ServiceError):
    """Unexpected failure inside the server surfaced with a 5xx status."""


class StartupError(ServiceError):
    """Fatal failure while bringing the server up, such as a port bind error."""

    kind = ErrorKind.STARTUP
