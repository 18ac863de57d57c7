"""Tests for the Starlette request/response adapters."""

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from shieldlog.application.security_headers import SecurityHeadersMiddleware
from shieldlog.domain.errors import AnnotationError
from shieldlog.infrastructure.middleware import StarletteRequest, StarletteResponse


def make_request(path: str = "/api/users", query: bytes = b"", headers=None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": query,
        "headers": headers or [],
        "scheme": "http",
        "server": ("testserver", 80),
    }
    return Request(scope)


class TestStarletteRequest:
    def test_exposes_request_fields(self):
        request = StarletteRequest(make_request(query=b"page=2", headers=[(b"x-request-id", b"abc")]))

        assert request.path == "/api/users"
        assert request.method == "GET"
        assert request.query == "page=2"
        assert request.headers.get("X-Request-Id") == "abc"

    def test_set_stores_on_request_state(self):
        raw = make_request()
        request = StarletteRequest(raw)

        request.set("request_start_time", "1700000000000")

        assert raw.state.request_start_time == "1700000000000"
        assert request.get("request_start_time") == "1700000000000"
        assert request.get("missing", "default") == "default"

    def test_set_rejects_empty_key(self):
        with pytest.raises(AnnotationError):
            StarletteRequest(make_request()).set("", "x")


class TestStarletteResponse:
    def test_with_header_updates_underlying_response(self):
        raw = PlainTextResponse("ok")
        response = StarletteResponse(raw)

        result = response.with_header("X-Frame-Options", "DENY")

        assert result is response
        assert raw.headers["x-frame-options"] == "DENY"

    def test_security_headers_applied_once(self):
        raw = PlainTextResponse("ok")
        mw = SecurityHeadersMiddleware()

        mw.add_security_headers(mw.add_security_headers(StarletteResponse(raw)))

        assert raw.headers.getlist("x-frame-options") == ["DENY"]
        assert raw.headers["strict-transport-security"] == "max-age=31536000"
