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
"""CORS configuration and the compiled policy derived from it.

Framework-agnostic: nothing here touches a request or response object, so
the same :class:`CORSPolicy` can back any adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pycors.kernel.exceptions import InvalidCORSConfigurationException

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
MAX_AGE = "Access-Control-Max-Age"
REQUEST_METHOD = "Access-Control-Request-Method"

DEFAULT_ALLOW_METHODS: tuple[str, ...] = ("GET", "POST", "HEAD")
DEFAULT_MAX_AGE = 86400  # seconds


@dataclass(frozen=True)
class CORSConfig:
    """Configuration for Cross-Origin Resource Sharing.

    Empty ``allow_methods`` and a zero ``max_age`` mean "use the default"
    and are filled in when the policy is built.
    """

    allow_origins: list[str] = field(default_factory=list)
    allow_all_origins: bool = False
    allow_methods: list[str] = field(default_factory=list)
    allow_headers: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    max_age: int = 0  # seconds


def permissive_cors_config() -> CORSConfig:
    """Any origin, the common REST verbs, no credentials."""
    return CORSConfig(
        allow_all_origins=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=DEFAULT_MAX_AGE,
    )


@dataclass(frozen=True)
class CORSPolicy:
    """A validated :class:`CORSConfig` with its header values precomputed.

    Build with :meth:`from_config`; instances are immutable and safe to share
    across concurrent requests.
    """

    allow_origins: frozenset[str]
    allow_all_origins: bool
    allow_credentials: bool
    allow_methods_value: str
    allow_headers_value: str
    max_age_value: str

    @classmethod
    def from_config(cls, config: CORSConfig) -> CORSPolicy:
        """Validate and normalise *config*.

        Raises:
            InvalidCORSConfigurationException: if wildcard origins are combined
                with credentials, or ``max_age`` is negative.
        """
        if config.allow_all_origins and config.allow_credentials:
            raise InvalidCORSConfigurationException(
                "allow_all_origins=True conflicts with allow_credentials=True",
                code="CORS_CONFLICT",
                context={"allow_all_origins": True, "allow_credentials": True},
            )
        if config.max_age < 0:
            raise InvalidCORSConfigurationException(
                f"max_age must not be negative, got {config.max_age}",
                code="CORS_MAX_AGE",
                context={"max_age": config.max_age},
            )

        methods = config.allow_methods or DEFAULT_ALLOW_METHODS
        max_age = config.max_age or DEFAULT_MAX_AGE

        return cls(
            allow_origins=frozenset(config.allow_origins),
            allow_all_origins=config.allow_all_origins,
            allow_credentials=config.allow_credentials,
            allow_methods_value=", ".join(methods),
            allow_headers_value=", ".join(config.allow_headers),
            max_age_value=str(max_age),
        )

    @property
    def varies_by_origin(self) -> bool:
        """``True`` when the allowed origin is echoed, so caches must key on ``Origin``."""
        return not self.allow_all_origins

    def is_origin_allowed(self, origin: str) -> bool:
        # Exact, case-sensitive match only.
        return self.allow_all_origins or origin in self.allow_origins

    def response_headers(self, origin: str) -> dict[str, str]:
        """Return the ``Access-Control-*`` headers for an allowed *origin*.

        ``Vary`` is not included; see :attr:`varies_by_origin`.
        """
        headers = {ALLOW_ORIGIN: "*" if self.allow_all_origins else origin}
        if self.allow_credentials:
            headers[ALLOW_CREDENTIALS] = "true"
        if self.allow_methods_value:
            headers[ALLOW_METHODS] = self.allow_methods_value
        if self.allow_headers_value:
            headers[ALLOW_HEADERS] = self.allow_headers_value
        headers[MAX_AGE] = self.max_age_value
        return headers

    @staticmethod
    def is_preflight(method: str, request_method: str | None) -> bool:
        """An ``OPTIONS`` request naming the method it intends to use."""
        return method == "OPTIONS" and bool(request_method)
