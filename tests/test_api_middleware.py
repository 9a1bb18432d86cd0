"""Regression tests for the interceptor chain: headers, CORS, logging, bodies, static files."""
# pylint: disable=duplicate-code

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from detection_api.api import create_api_application
from detection_api.api.middleware import (
    API_MIDDLEWARE_ORDER,
    SECURITY_HEADERS,
    AccessLogMiddleware,
    BodyParsingMiddleware,
    ErrorBoundaryMiddleware,
    MiddlewareCapability,
    SecurityHeadersMiddleware,
    StaticFilesMiddleware,
    api_install_middleware_chain,
)
from detection_api.config import AppSettings, config_create_runtime_context

TEN_MEBIBYTES = 10 * 1024 * 1024


def _build_application(
    static_directory: str = "missing-static-directory",
    body_limit_bytes: int = TEN_MEBIBYTES,
) -> FastAPI:
    """Create application with an echo route exposing the parsed body.

    Args:
        static_directory: Directory served by the static file interceptor.
        body_limit_bytes: Body size ceiling.

    Returns:
        FastAPI: Application under test.
    """

    settings = AppSettings(
        _env_file=None,
        environment_name="production",
        application_port=5000,
        static_directory=static_directory,
        body_limit_bytes=body_limit_bytes,
    )
    application = create_api_application(config_create_runtime_context(settings))

    @application.post("/api/echo")
    async def echo(request: Request) -> dict[str, Any]:
        raw_body = await request.body()
        return {"parsed": request.state.parsed_body, "raw_length": len(raw_body)}

    @application.get("/api/explode")
    def explode() -> dict[str, str]:
        raise RuntimeError("detector exploded")

    return application


def test_middleware_chain_registers_interceptors_outermost_first() -> None:
    """Keep the declared capability order as the effective wrapping order.

    Returns:
        None: Assertions validate middleware registration.

    Raises:
        AssertionError: Raised when the chain order differs.
    """

    application = _build_application()

    assert API_MIDDLEWARE_ORDER == (
        MiddlewareCapability.SECURITY_HEADERS,
        MiddlewareCapability.CORS,
        MiddlewareCapability.ACCESS_LOG,
        MiddlewareCapability.ERROR_BOUNDARY,
        MiddlewareCapability.BODY_PARSING,
        MiddlewareCapability.STATIC_FILES,
    )
    assert [middleware.cls for middleware in application.user_middleware] == [
        SecurityHeadersMiddleware,
        CORSMiddleware,
        AccessLogMiddleware,
        ErrorBoundaryMiddleware,
        BodyParsingMiddleware,
        StaticFilesMiddleware,
    ]


def test_middleware_chain_rejects_repeated_capabilities() -> None:
    """Refuse an order that installs the same interceptor twice."""

    settings = AppSettings(_env_file=None)
    repeated_order = (MiddlewareCapability.CORS, MiddlewareCapability.CORS)

    with pytest.raises(ValueError, match="must not repeat"):
        api_install_middleware_chain(FastAPI(), settings, order=repeated_order)


@pytest.mark.parametrize("path", ["/api/health", "/no-such-route", "/api/explode"])
def test_middleware_security_headers_are_added_to_every_response(path: str) -> None:
    """Stamp the security header set on success, not-found and error responses."""

    client = TestClient(_build_application())

    response = client.get(path)

    for header_name, header_value in SECURITY_HEADERS:
        assert response.headers[header_name] == header_value


def test_middleware_cors_allows_any_origin_with_credentials() -> None:
    """Allow cross-origin requests from arbitrary origins."""

    client = TestClient(_build_application())

    response = client.get("/api/health", headers={"Origin": "https://viewer.example"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "https://viewer.example")
    assert response.headers["access-control-allow-credentials"] == "true"


def test_middleware_cors_answers_preflight_requests() -> None:
    """Answer preflight requests for allowed methods and headers."""

    client = TestClient(_build_application())

    response = client.options(
        "/api/health",
        headers={
            "Origin": "https://viewer.example",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://viewer.example"
    assert "PUT" in response.headers["access-control-allow-methods"]
    assert response.headers["x-content-type-options"] == "nosniff"


def test_middleware_access_log_records_method_url_and_status(caplog: pytest.LogCaptureFixture) -> None:
    """Log one access line per request including the final status."""

    client = TestClient(_build_application())

    with caplog.at_level(logging.INFO, logger="detection_api.access"):
        client.get("/api/health?probe=1")
        client.get("/api/explode")

    access_messages = [record.getMessage() for record in caplog.records if record.name == "detection_api.access"]
    assert len(access_messages) == 2
    assert re.fullmatch(r"GET /api/health\?probe=1 200 \d+\.\d{3} ms - \d+", access_messages[0])
    assert access_messages[1].startswith("GET /api/explode 500 ")


def test_middleware_rejects_json_body_above_ten_mebibytes() -> None:
    """Return 413 instead of crashing on an oversized JSON body."""

    client = TestClient(_build_application())
    oversized_body = b'{"blob": "' + b"a" * TEN_MEBIBYTES + b'"}'

    response = client.post("/api/echo", content=oversized_body, headers={"Content-Type": "application/json"})

    assert response.status_code == 413
    payload = response.json()
    assert payload["error"] == "Internal Server Error"
    assert "too large" in payload["message"]


def test_middleware_rejects_oversized_body_on_unmatched_route() -> None:
    """Apply the body ceiling before route dispatch."""

    client = TestClient(_build_application(body_limit_bytes=32))

    response = client.post("/no-such-route", json={"blob": "a" * 64})

    assert response.status_code == 413


def test_middleware_rejects_streamed_body_without_content_length() -> None:
    """Count streamed bytes when no Content-Length header is declared."""

    client = TestClient(_build_application(body_limit_bytes=32))

    def body_chunks():
        yield b'{"blob": "'
        yield b"a" * 64
        yield b'"}'

    response = client.post("/api/echo", content=body_chunks(), headers={"Content-Type": "application/json"})

    assert response.status_code == 413


def test_middleware_rejects_malformed_json_body() -> None:
    """Return 400 for a body that is not valid JSON."""

    client = TestClient(_build_application())

    response = client.post("/api/echo", content=b'{"broken": ', headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"] == "Internal Server Error"
    assert "not valid JSON" in response.json()["message"]


def test_middleware_rejects_scalar_json_body() -> None:
    """Accept only objects and arrays at the JSON top level."""

    client = TestClient(_build_application())

    response = client.post("/api/echo", content=b"42", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_middleware_parses_json_body_and_replays_raw_bytes() -> None:
    """Expose the parsed JSON body while keeping the stream readable."""

    client = TestClient(_build_application())
    body = {"video": "clip.mp4", "frames": [1, 2, 3]}

    payload_bytes = json.dumps(body).encode("utf-8")

    response = client.post(
        "/api/echo",
        content=payload_bytes,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["parsed"] == body
    assert response.json()["raw_length"] == len(payload_bytes)


def test_middleware_parses_urlencoded_form_body() -> None:
    """Collect repeated form keys into lists and keep blank values."""

    client = TestClient(_build_application())

    response = client.post(
        "/api/echo",
        content=b"tag=a&tag=b&name=clip&note=",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    assert response.json()["parsed"] == {"tag": ["a", "b"], "name": "clip", "note": ""}


def test_middleware_leaves_other_content_types_unparsed() -> None:
    """Skip parsing for content types without a registered parser."""

    client = TestClient(_build_application())

    response = client.post("/api/echo", content=b"plain text", headers={"Content-Type": "text/plain"})

    assert response.status_code == 200
    assert response.json() == {"parsed": {}, "raw_length": len(b"plain text")}


def test_middleware_serves_files_from_static_directory(tmp_path: Path) -> None:
    """Serve an existing file whose path matches the request path."""

    static_directory = tmp_path / "public"
    static_directory.mkdir()
    (static_directory / "hello.txt").write_text("static hello", encoding="utf-8")
    client = TestClient(_build_application(static_directory=str(static_directory)))

    response = client.get("/hello.txt")

    assert response.status_code == 200
    assert response.text == "static hello"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"


def test_middleware_static_misses_fall_through_to_routing(tmp_path: Path) -> None:
    """Pass missing files, index-less directories and non-GET methods on to the router."""

    static_directory = tmp_path / "public"
    static_directory.mkdir()
    (static_directory / "assets").mkdir()
    (static_directory / "hello.txt").write_text("static hello", encoding="utf-8")
    client = TestClient(_build_application(static_directory=str(static_directory)))

    missing_response = client.get("/missing.txt")
    root_response = client.get("/")
    directory_response = client.get("/assets/")
    post_response = client.post("/hello.txt")

    assert missing_response.status_code == 404
    assert missing_response.json()["message"] == "Route GET /missing.txt does not exist"
    assert "Deepfake Detection Server" in root_response.text
    assert directory_response.status_code == 404
    assert directory_response.json()["message"] == "Route GET /assets/ does not exist"
    assert post_response.status_code == 404


def test_middleware_serves_directory_index_for_root_path(tmp_path: Path) -> None:
    """Answer `/` with the static `index.html` ahead of the landing page."""

    static_directory = tmp_path / "public"
    static_directory.mkdir()
    (static_directory / "index.html").write_text("<p>static index</p>", encoding="utf-8")
    client = TestClient(_build_application(static_directory=str(static_directory)))

    get_response = client.get("/")
    head_response = client.head("/")

    assert get_response.status_code == 200
    assert get_response.text == "<p>static index</p>"
    assert get_response.headers["content-type"].startswith("text/html")
    assert head_response.status_code == 200
    assert head_response.headers["content-length"] == str(len("<p>static index</p>"))
