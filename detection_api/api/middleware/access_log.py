"""Access logging interceptor using the compact development log format."""

from __future__ import annotations

import logging
import time

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

access_logger = logging.getLogger("detection_api.access")


class AccessLogMiddleware:
    """Log `METHOD URL STATUS LATENCY ms - LENGTH` once each response completes."""

    def __init__(self, app: ASGIApp, logger: logging.Logger = access_logger):
        self.app = app
        self._logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        response_status = 500
        content_length = "-"

        async def send_and_record(message: Message) -> None:
            nonlocal response_status, content_length
            if message["type"] == "http.response.start":
                response_status = message["status"]
                content_length = Headers(raw=message.get("headers", [])).get("content-length", "-")
            await send(message)

        try:
            await self.app(scope, receive, send_and_record)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._logger.info(
                "%s %s %d %.3f ms - %s",
                scope["method"],
                _access_log_url(scope),
                response_status,
                elapsed_ms,
                content_length,
            )


def _access_log_url(scope: Scope) -> str:
    query_string = scope.get("query_string", b"")
    if query_string:
        return f"{scope['path']}?{query_string.decode('latin-1')}"
    return scope["path"]
