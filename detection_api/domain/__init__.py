"""Domain models and error taxonomy shared across application layers."""

from .envelopes import (
    SERVER_NAME,
    SERVER_VERSION,
    domain_build_error_payload,
    domain_build_health_payload,
    domain_build_info_payload,
    domain_build_not_found_payload,
    domain_utc_timestamp,
)
from .errors import (
    ClientError,
    ErrorKind,
    MalformedBodyError,
    PayloadTooLargeError,
    ServerError,
    ServiceError,
    StartupError,
)

__all__ = [
    "SERVER_NAME",
    "SERVER_VERSION",
    "ClientError",
    "ErrorKind",
    "MalformedBodyError",
    "PayloadTooLargeError",
    "ServerError",
    "ServiceError",
    "StartupError",
    "domain_build_error_payload",
    "domain_build_health_payload",
    "domain_build_info_payload",
    "domain_build_not_found_payload",
    "domain_utc_timestamp",
]
