"""Server information endpoint router."""

import platform
import sys

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from detection_api.config import RuntimeContext
from detection_api.domain import domain_build_info_payload

from .common import ROUTE_METHODS


def api_create_info_router(context: RuntimeContext) -> APIRouter:
    """Create server information router.

    Args:
        context: Runtime context providing the configured port.

    Returns:
        APIRouter: Router exposing the `/info` endpoint.

    Raises:
        ValueError: Raised when context is None.
    """

    if context is None:
        raise ValueError("context must not be None")

    router = APIRouter(tags=["info"])

    @router.api_route("/info", methods=ROUTE_METHODS)
    @router.api_route("/info/", methods=ROUTE_METHODS, include_in_schema=False)
    def api_server_info() -> JSONResponse:
        """Return server identity and runtime details.

        Returns:
            JSONResponse: HTTP 200 payload with name, version, port, runtime and platform.
        """

        payload = domain_build_info_payload(
            port=context.settings.application_port,
            runtime_version=platform.python_version(),
            platform_name=sys.platform,
        )
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
