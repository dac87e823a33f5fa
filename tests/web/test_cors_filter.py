# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CORSFilter running inside WebFilterChainMiddleware."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route
from starlette.testclient import TestClient

from pycors.container.ordering import HIGHEST_PRECEDENCE, get_order
from pycors.kernel.exceptions import InvalidCORSConfigurationException
from pycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from pycors.web.adapters.starlette.filters import CORSFilter, cors, default
from pycors.web.cors import CORSConfig

ACCESS_CONTROL = "access-control-"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_client(cors_filter: CORSFilter) -> tuple[TestClient, list[str]]:
    """Client for an app whose handler records each downstream invocation."""
    calls: list[str] = []

    async def _handler(request: Request) -> PlainTextResponse:
        calls.append(request.method)
        return PlainTextResponse("OK")

    async def _vary_handler(request: Request) -> PlainTextResponse:
        calls.append(request.method)
        return PlainTextResponse("OK", headers={"Vary": "Accept-Encoding"})

    async def _multi_vary_handler(request: Request) -> PlainTextResponse:
        calls.append(request.method)
        response = PlainTextResponse("OK")
        response.raw_headers.extend([(b"vary", b"Accept-Encoding"), (b"vary", b"Accept-Language")])
        return response

    app = Starlette(
        routes=[
            Route("/hello", _handler, methods=["GET", "POST", "OPTIONS"]),
            Route("/vary", _vary_handler),
            Route("/multi-vary", _multi_vary_handler),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=[cors_filter])],
    )
    return TestClient(app), calls


def _cors_headers(resp) -> dict[str, str]:
    return {k: v for k, v in resp.headers.items() if k.lower().startswith(ACCESS_CONTROL)}


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestCORSFilterConstruction:
    def test_wildcard_with_credentials_fails_at_build(self):
        with pytest.raises(InvalidCORSConfigurationException):
            cors(CORSConfig(allow_all_origins=True, allow_credentials=True))

    def test_none_config_uses_permissive_preset(self):
        assert CORSFilter().policy == default().policy

    def test_cors_runs_near_front_of_chain(self):
        assert get_order(CORSFilter) == HIGHEST_PRECEDENCE + 50


# ---------------------------------------------------------------------------
# Requests without a permitted origin
# ---------------------------------------------------------------------------


class TestNoOrigin:
    @pytest.mark.parametrize(
        "cfg",
        [
            CORSConfig(allow_all_origins=True),
            CORSConfig(allow_origins=["https://a.com"], allow_credentials=True),
        ],
    )
    def test_no_cors_headers_without_origin(self, cfg):
        client, calls = _make_client(cors(cfg))
        resp = client.get("/hello")

        assert resp.status_code == 200
        assert _cors_headers(resp) == {}
        assert calls == ["GET"]

    def test_empty_origin_treated_as_absent(self):
        client, calls = _make_client(default())
        resp = client.get("/hello", headers={"Origin": ""})

        assert _cors_headers(resp) == {}
        assert calls == ["GET"]

    def test_preflight_without_origin_reaches_handler(self):
        client, calls = _make_client(default())
        resp = client.options("/hello", headers={"Access-Control-Request-Method": "POST"})

        assert resp.status_code == 200
        assert calls == ["OPTIONS"]


class TestDisallowedOrigin:
    def setup_method(self):
        self.client, self.calls = _make_client(cors(CORSConfig(allow_origins=["https://a.com"])))

    def test_request_proceeds_without_cors_headers(self):
        resp = self.client.get("/hello", headers={"Origin": "https://evil.com"})

        assert resp.status_code == 200
        assert resp.text == "OK"
        assert _cors_headers(resp) == {}
        assert "vary" not in resp.headers
        assert self.calls == ["GET"]

    def test_preflight_from_disallowed_origin_is_not_short_circuited(self):
        resp = self.client.options(
            "/hello",
            headers={"Origin": "https://evil.com", "Access-Control-Request-Method": "POST"},
        )

        assert resp.status_code == 200
        assert _cors_headers(resp) == {}
        assert self.calls == ["OPTIONS"]


# ---------------------------------------------------------------------------
# Allowed origins
# ---------------------------------------------------------------------------


class TestWildcardOrigin:
    def setup_method(self):
        self.client, self.calls = _make_client(cors(CORSConfig(allow_all_origins=True)))

    @pytest.mark.parametrize("origin", ["https://example.com", "http://localhost:3000", "null"])
    def test_any_origin_gets_star(self, origin):
        resp = self.client.get("/hello", headers={"Origin": origin})

        assert resp.headers["access-control-allow-origin"] == "*"
        assert "vary" not in resp.headers

    def test_defaults_applied(self):
        resp = self.client.get("/hello", headers={"Origin": "https://example.com"})

        assert resp.headers["access-control-allow-methods"] == "GET, POST, HEAD"
        assert resp.headers["access-control-max-age"] == "86400"
        assert "access-control-allow-headers" not in resp.headers
        assert "access-control-allow-credentials" not in resp.headers


class TestListedOrigin:
    def setup_method(self):
        self.client, self.calls = _make_client(
            cors(CORSConfig(allow_origins=["https://a.com", "https://b.com"], max_age=600))
        )

    def test_origin_echoed_with_vary(self):
        resp = self.client.get("/hello", headers={"Origin": "https://b.com"})

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "https://b.com"
        assert resp.headers["vary"] == "Origin"
        assert self.calls == ["GET"]

    def test_vary_appended_to_downstream_value(self):
        resp = self.client.get("/vary", headers={"Origin": "https://a.com"})

        vary = [v.strip() for v in resp.headers["vary"].split(",")]
        assert vary == ["Accept-Encoding", "Origin"]

    def test_every_downstream_vary_line_kept(self):
        resp = self.client.get("/multi-vary", headers={"Origin": "https://a.com"})

        assert resp.headers.get_list("vary") == ["Accept-Encoding", "Accept-Language", "Origin"]

    def test_configured_max_age(self):
        resp = self.client.get("/hello", headers={"Origin": "https://a.com"})
        assert resp.headers["access-control-max-age"] == "600"

    def test_origin_match_is_case_sensitive(self):
        resp = self.client.get("/hello", headers={"Origin": "https://A.com"})
        assert _cors_headers(resp) == {}


# ---------------------------------------------------------------------------
# Preflight
# ---------------------------------------------------------------------------


class TestPreflight:
    def setup_method(self):
        self.client, self.calls = _make_client(cors(CORSConfig(allow_origins=["https://a.com"])))

    def test_preflight_short_circuits_with_204(self):
        resp = self.client.options(
            "/hello",
            headers={"Origin": "https://a.com", "Access-Control-Request-Method": "POST"},
        )

        assert resp.status_code == 204
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "https://a.com"
        assert self.calls == []

    def test_preflight_short_circuits_for_unrouted_path(self):
        resp = self.client.options(
            "/missing",
            headers={"Origin": "https://a.com", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status_code == 204

    def test_options_without_request_method_reaches_handler(self):
        resp = self.client.options("/hello", headers={"Origin": "https://a.com"})

        assert resp.status_code == 200
        assert resp.text == "OK"
        assert resp.headers["access-control-allow-origin"] == "https://a.com"
        assert self.calls == ["OPTIONS"]

    def test_request_method_header_on_non_options_is_ignored(self):
        resp = self.client.post(
            "/hello",
            headers={"Origin": "https://a.com", "Access-Control-Request-Method": "POST"},
        )

        assert resp.status_code == 200
        assert self.calls == ["POST"]


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_default_filter_simple_get(self):
        client, calls = _make_client(default())
        resp = client.get("/hello", headers={"Origin": "https://example.com"})

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, POST, PUT, DELETE, PATCH, OPTIONS"
        assert resp.headers["access-control-allow-headers"] == "Content-Type, Authorization"
        assert resp.headers["access-control-max-age"] == "86400"
        assert "access-control-allow-credentials" not in resp.headers
        assert calls == ["GET"]

    def test_credentialed_preflight(self):
        client, calls = _make_client(
            cors(CORSConfig(allow_origins=["https://a.com"], allow_credentials=True))
        )
        resp = client.options(
            "/hello",
            headers={"Origin": "https://a.com", "Access-Control-Request-Method": "POST"},
        )

        assert resp.status_code == 204
        assert resp.headers["access-control-allow-origin"] == "https://a.com"
        assert resp.headers["vary"] == "Origin"
        assert resp.headers["access-control-allow-credentials"] == "true"
        assert calls == []

    def test_downstream_error_has_no_cors_headers(self):
        async def _boom(request: Request) -> PlainTextResponse:
            raise RuntimeError("handler failed")

        app = Starlette(
            routes=[Route("/boom", _boom)],
            middleware=[Middleware(WebFilterChainMiddleware, filters=[default()])],
        )
        client = TestClient(app, raise_server_exceptions=False)

        resp = client.get("/boom", headers={"Origin": "https://example.com"})

        assert resp.status_code == 500
        assert _cors_headers(resp) == {}


# ---------------------------------------------------------------------------
# Direct do_filter invocation
# ---------------------------------------------------------------------------


def _request(method: str, headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": "/direct",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


class TestDoFilterDirect:
    @pytest.mark.asyncio
    async def test_preflight_never_awaits_call_next(self):
        async def _call_next(request):
            raise AssertionError("downstream must not run for a preflight")

        response = await cors(CORSConfig(allow_origins=["https://a.com"])).do_filter(
            _request("OPTIONS", {"Origin": "https://a.com", "Access-Control-Request-Method": "PUT"}),
            _call_next,
        )

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "https://a.com"

    @pytest.mark.asyncio
    async def test_filter_headers_replace_downstream_values(self):
        async def _call_next(request):
            return Response("body", headers={"Access-Control-Allow-Origin": "https://stale.com"})

        response = await default().do_filter(
            _request("GET", {"Origin": "https://example.com"}),
            _call_next,
        )

        assert response.headers.getlist("access-control-allow-origin") == ["*"]
