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
"""Starlette application factory with the pycors filter chain installed."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from pycors.config.properties.cors import CORSProperties
from pycors.container.ordering import sort_by_order
from pycors.core.config import Config
from pycors.logging import LoggingPort, StructlogAdapter
from pycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from pycors.web.adapters.starlette.filters import CORSFilter
from pycors.web.cors import CORSConfig
from pycors.web.ports.filter import WebFilter

logger = structlog.get_logger("pycors.web")


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    *,
    cors: CORSConfig | None = None,
    config: Config | None = None,
    filters: Sequence[WebFilter] = (),
    logging_port: LoggingPort | None = None,
    debug: bool = False,
    **starlette_kwargs: Any,
) -> Starlette:
    """Create a Starlette application running *filters* plus an optional CORS filter.

    An explicit *cors* config wins and applies to every path.  Otherwise,
    when *config* is given, its ``pycors.web.cors`` section is bound and a
    :class:`CORSFilter` scoped by its ``url_patterns``/``exclude_patterns``
    is installed if ``enabled`` is true.

    *config* also configures logging through *logging_port*
    (a :class:`StructlogAdapter` unless another port is supplied).

    Raises:
        InvalidCORSConfigurationException: if the CORS configuration is
            rejected; the application is never created.
    """
    if config is not None:
        (logging_port or StructlogAdapter()).configure(config)

    chain: list[WebFilter] = list(filters)
    if cors is not None:
        chain.append(CORSFilter(cors))
    elif config is not None:
        props = config.bind(CORSProperties)
        if props.enabled:
            chain.append(
                CORSFilter(
                    props.to_cors_config(),
                    url_patterns=props.url_patterns,
                    exclude_patterns=props.exclude_patterns,
                )
            )

    chain = sort_by_order(chain)
    logger.info("filter_chain_configured", filters=[type(f).__name__ for f in chain])

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        **starlette_kwargs,
    )
