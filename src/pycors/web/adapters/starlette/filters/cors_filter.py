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
"""CORS filter — applies a :class:`CORSPolicy` to each cross-origin request."""

from __future__ import annotations

from collections.abc import Iterable
from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from pycors.container.ordering import HIGHEST_PRECEDENCE, order
from pycors.web.cors import REQUEST_METHOD, CORSConfig, CORSPolicy, permissive_cors_config
from pycors.web.filters import PathScopedFilter
from pycors.web.ports.filter import CallNext

logger = structlog.get_logger("pycors.web")


@order(HIGHEST_PRECEDENCE + 50)
class CORSFilter(PathScopedFilter):
    """Writes ``Access-Control-*`` headers for permitted origins.

    Requests without an ``Origin`` header, or from an origin the policy does
    not allow, pass through untouched; the browser enforces the restriction.
    Preflight requests from an allowed origin are answered with ``204`` and
    never reach the downstream handler.

    For other requests the headers are added to the downstream response after
    ``call_next`` returns.  If the downstream raises, the resulting error
    response carries no CORS headers and the browser reports a CORS failure.

    *url_patterns* and *exclude_patterns* limit the filter to part of the
    application (e.g. ``["/api/*"]``); requests outside that scope get no
    CORS handling at all.

    The policy is built in the constructor, so an invalid configuration
    fails at startup rather than on the first request.
    """

    def __init__(
        self,
        config: CORSConfig | None = None,
        *,
        url_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        super().__init__(url_patterns, exclude_patterns)
        self._policy = CORSPolicy.from_config(config or permissive_cors_config())
        logger.info(
            "cors_filter_initialized",
            allow_all_origins=self._policy.allow_all_origins,
            allow_origins=sorted(self._policy.allow_origins),
            allow_credentials=self._policy.allow_credentials,
            max_age=self._policy.max_age_value,
            url_patterns=list(self.scope.includes),
            exclude_patterns=list(self.scope.excludes),
        )

    @property
    def policy(self) -> CORSPolicy:
        return self._policy

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        origin = request.headers.get("origin")
        if not origin:
            return cast(Response, await call_next(request))

        policy = self._policy
        if not policy.is_origin_allowed(origin):
            logger.debug("cors_origin_rejected", origin=origin, path=request.url.path)
            return cast(Response, await call_next(request))

        if policy.is_preflight(request.method, request.headers.get(REQUEST_METHOD)):
            logger.debug("cors_preflight", origin=origin, path=request.url.path)
            response = Response(status_code=204)
        else:
            response = cast(Response, await call_next(request))

        for name, value in policy.response_headers(origin).items():
            response.headers[name] = value
        if policy.varies_by_origin:
            # Separate header line; existing Vary values stay as sent.
            response.headers.append("Vary", "Origin")

        return response


def cors(config: CORSConfig) -> CORSFilter:
    """Build a :class:`CORSFilter` for *config*.

    Raises:
        InvalidCORSConfigurationException: if *config* is rejected.
    """
    return CORSFilter(config)


def default() -> CORSFilter:
    """A :class:`CORSFilter` for :func:`~pycors.web.cors.permissive_cors_config`."""
    return CORSFilter(permissive_cors_config())
