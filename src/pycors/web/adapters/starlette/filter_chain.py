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
"""ASGI middleware that runs a fixed sequence of WebFilters per HTTP request."""

from __future__ import annotations

from collections.abc import Sequence

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from pycors.web.ports.filter import WebFilter


class WebFilterChainMiddleware:
    """Runs *filters* in list order, first one outermost, then the wrapped app.

    Filters see a buffered :class:`Response`, so they can rewrite status and
    headers after the downstream app has finished.  Only ``http`` scopes go
    through the chain; ``websocket`` and ``lifespan`` reach the app directly.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self.filters: tuple[WebFilter, ...] = tuple(filters)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        chain = _Chain(self.filters, _Downstream(self.app, scope, receive))
        response = await chain(Request(scope, receive, send))
        await response(scope, receive, send)


class _Chain:
    """One request's walk through the filters; each ``__call__`` advances a step."""

    def __init__(self, filters: tuple[WebFilter, ...], terminal: _Downstream, position: int = 0) -> None:
        self._filters = filters
        self._terminal = terminal
        self._position = position

    async def __call__(self, request: Request) -> Response:
        path = request.url.path
        position = self._position
        while position < len(self._filters):
            current = self._filters[position]
            position += 1
            if current.applies_to(path):
                return await current.do_filter(request, _Chain(self._filters, self._terminal, position))
        return await self._terminal()


class _Downstream:
    """Runs the wrapped app once and buffers what it sends into a Response."""

    def __init__(self, app: ASGIApp, scope: Scope, receive: Receive) -> None:
        self._app = app
        self._scope = scope
        self._receive = receive
        self._status = 200
        self._headers: list[tuple[bytes, bytes]] = []
        self._body = bytearray()

    async def __call__(self) -> Response:
        await self._app(self._scope, self._receive, self._record)
        response = Response(content=bytes(self._body), status_code=self._status)
        response.raw_headers[:] = self._headers
        return response

    async def _record(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self._status = message["status"]
            self._headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self._body += message.get("body", b"")
