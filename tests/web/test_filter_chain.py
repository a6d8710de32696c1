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
"""Tests for WebFilterChainMiddleware — ordering, short-circuit, conditional skip."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from csrfkit.web.adapters.starlette.context import buffer_request
from csrfkit.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from csrfkit.web.filters import OncePerRequestFilter
from csrfkit.web.ports.filter import WebFilter


class HeaderFilter(OncePerRequestFilter):
    """Adds X-Filter-A header to every response."""

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Filter-A"] = "applied"
        return response


class ApiOnlyFilter(OncePerRequestFilter):
    """Only applies to /api/* paths."""

    url_patterns = ["/api/*"]

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Api"] = "yes"
        return response


class BlockingFilter(OncePerRequestFilter):
    """Short-circuits /blocked without calling the route."""

    url_patterns = ["/blocked"]

    async def do_filter(self, request, call_next):
        return JSONResponse({"blocked": True}, status_code=400)


class BodyPeekFilter(OncePerRequestFilter):
    """Consumes the body, then hands a replaying request downstream."""

    async def do_filter(self, request, call_next):
        buffered = await buffer_request(request)
        response = await call_next(buffered)
        response.headers["X-Body-Length"] = str(len(await request.body()))
        return response


async def _echo(request: Request) -> PlainTextResponse:
    return PlainTextResponse((await request.body()).decode() or "empty")


def _client(*filters) -> TestClient:
    app = Starlette(
        routes=[
            Route("/api/items", _echo, methods=["GET", "POST"]),
            Route("/blocked", _echo),
            Route("/plain", _echo, methods=["GET", "POST"]),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )
    return TestClient(app)


class TestWebFilterChain:
    def test_filter_conforms_to_protocol(self) -> None:
        assert isinstance(HeaderFilter(), WebFilter)

    def test_filters_apply(self) -> None:
        response = _client(HeaderFilter(), ApiOnlyFilter()).get("/api/items")
        assert response.headers["X-Filter-A"] == "applied"
        assert response.headers["X-Api"] == "yes"

    def test_url_patterns_skip_non_matching(self) -> None:
        response = _client(ApiOnlyFilter()).get("/plain")
        assert response.status_code == 200
        assert "X-Api" not in response.headers

    def test_short_circuit(self) -> None:
        response = _client(HeaderFilter(), BlockingFilter()).get("/blocked")
        assert response.status_code == 400
        assert response.json() == {"blocked": True}
        assert response.headers["X-Filter-A"] == "applied"

    def test_body_is_replayed_to_route(self) -> None:
        response = _client(BodyPeekFilter()).post("/plain", content=b"payload")
        assert response.text == "payload"
        assert response.headers["X-Body-Length"] == "7"
