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
"""pycors web — CORS policy filter for WebFilter chains.

Framework-agnostic types are exported directly; the default (Starlette)
adapter is re-exported for convenience.
"""

from pycors.web.adapters.starlette import (
    CORSFilter,
    WebFilterChainMiddleware,
    cors,
    create_app,
    default,
)
from pycors.web.cors import CORSConfig, CORSPolicy, permissive_cors_config
from pycors.web.filters import PathScope, PathScopedFilter
from pycors.web.ports.filter import CallNext, WebFilter

__all__ = [
    # Framework-agnostic
    "CORSConfig",
    "CORSPolicy",
    "CallNext",
    "PathScope",
    "PathScopedFilter",
    "WebFilter",
    "permissive_cors_config",
    # Starlette adapter
    "CORSFilter",
    "WebFilterChainMiddleware",
    "cors",
    "create_app",
    "default",
]
