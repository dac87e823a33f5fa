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
"""CORS configuration properties (pycors.web.cors.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pycors.core.config import config_properties
from pycors.web.cors import CORSConfig


@config_properties(prefix="pycors.web.cors")
@dataclass
class CORSProperties:
    """Configuration for the CORS filter (pycors.web.cors.*)."""

    enabled: bool = False
    allow_origins: list[str] = field(default_factory=list)
    allow_all_origins: bool = False
    allow_methods: list[str] = field(default_factory=list)
    allow_headers: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    max_age: int = 0
    url_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)

    def to_cors_config(self) -> CORSConfig:
        return CORSConfig(
            allow_origins=list(self.allow_origins),
            allow_all_origins=self.allow_all_origins,
            allow_methods=list(self.allow_methods),
            allow_headers=list(self.allow_headers),
            allow_credentials=self.allow_credentials,
            max_age=self.max_age,
        )
