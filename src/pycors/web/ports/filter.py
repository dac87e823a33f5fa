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
"""Handler-chain port: what a filter receives and what it must provide.

Request and response stay ``Any`` here; the Starlette adapter pins them down.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class CallNext(Protocol):
    """Continuation into the remainder of the chain.

    Awaiting it runs every later filter and then the route handler, and
    yields their response.  A filter that never awaits it owns the response.
    """

    async def __call__(self, request: Any) -> Any: ...


@runtime_checkable
class WebFilter(Protocol):
    """A participant in the request chain run by the filter-chain middleware."""

    def applies_to(self, path: str) -> bool:
        """Whether this filter runs for a request to *path*; otherwise it is bypassed."""
        ...

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...
