"""Body parsing interceptor for JSON and URL-encoded payloads with a size ceiling."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from detection_api.domain import MalformedBodyError, PayloadTooLargeError

PARSED_BODY_STATE_KEY = "parsed_body"
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class BodyParsingMiddleware:
    """Read, bound and decode request bodies before route dispatch.

    The decoded body is stored on `request.state.parsed_body` and the raw
    bytes are replayed so downstream handlers can still read the stream.
    """

    def __init__(self, app: ASGIApp, limit_bytes: int):
        if limit_bytes < 1:
            raise ValueError("limit_bytes must be positive")
        self.app = app
        self._limit_bytes = limit_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state[PARSED_BODY_STATE_KEY] = {}

        headers = Headers(scope=scope)
        media_type, charset = _split_content_type(headers.get("content-type", ""))
        body_format = _body_format(media_type)
        if body_format is None:
            await self.app(scope, receive, send)
            return

        self._check_declared_length(headers.get("content-length"))
        body = await self._read_bounded_body(receive)
        if body:
            state[PARSED_BODY_STATE_KEY] = _decode_body(body, body_format, charset)

        body_replayed = False

        async def replay_receive() -> Message:
            nonlocal body_replayed
            if not body_replayed:
                body_replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay_receive, send)

    def _check_declared_length(self, content_length: str | None) -> None:
        if content_length is None:
            return
        try:
            declared_length = int(content_length)
        except ValueError as error:
            raise MalformedBodyError("invalid Content-Length header") from error
        if declared_length > self._limit_bytes:
            raise PayloadTooLargeError(_too_large_message(self._limit_bytes))

    async def _read_bounded_body(self, receive: Receive) -> bytes:
        chunks: list[bytes] = []
        received_length = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            received_length += len(chunk)
            if received_length > self._limit_bytes:
                raise PayloadTooLargeError(_too_large_message(self._limit_bytes))
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        return b"".join(chunks)


def _split_content_type(content_type: str) -> tuple[str, str]:
    media_type, _, parameters = content_type.partition(";")
    charset = "utf-8"
    for parameter in parameters.split(";"):
        name, _, value = parameter.strip().partition("=")
        if name.lower() == "charset" and value:
            charset = value.strip('"').lower()
    return media_type.strip().lower(), charset


def _body_format(media_type: str) -> str | None:
    if media_type == "application/json" or media_type.endswith("+json"):
        return "json"
    if media_type == _FORM_CONTENT_TYPE:
        return "form"
    return None


def _decode_body(body: bytes, body_format: str, charset: str) -> Any:
    try:
        text = body.decode(charset)
    except (LookupError, UnicodeDecodeError) as error:
        raise MalformedBodyError(f"request body is not valid {charset} text") from error

    if body_format == "form":
        parsed_form: dict[str, Any] = {}
        for key, value in parse_qsl(text, keep_blank_values=True):
            existing_value = parsed_form.get(key)
            if existing_value is None:
                parsed_form[key] = value
            elif isinstance(existing_value, list):
                existing_value.append(value)
            else:
                parsed_form[key] = [existing_value, value]
        return parsed_form

    try:
        parsed_json = json.loads(text)
    except json.JSONDecodeError as error:
        raise MalformedBodyError(f"request body is not valid JSON: {error.msg}") from error
    # Only objects and arrays are accepted at the top level.
    if not isinstance(parsed_json, (dict, list)):
        raise MalformedBodyError("request body must be a JSON object or array")
    return parsed_json


def _too_large_message(limit_bytes: int) -> str:
    return f"request entity too large: body exceeds {limit_bytes} bytes"
