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
"""Path scoping shared by filters that only guard part of an application."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any

from pycors.web.ports.filter import CallNext


@dataclass(frozen=True)
class PathScope:
    """Glob include/exclude lists over request paths.

    No includes means every path.  An exclude beats a matching include.
    """

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    @classmethod
    def of(cls, includes: Iterable[str] = (), excludes: Iterable[str] = ()) -> PathScope:
        return cls(tuple(includes), tuple(excludes))

    def matches(self, path: str) -> bool:
        if self.includes and not any(fnmatchcase(path, p) for p in self.includes):
            return False
        return not any(fnmatchcase(path, p) for p in self.excludes)


class PathScopedFilter(abc.ABC):
    """Base class for :class:`~pycors.web.ports.filter.WebFilter` implementations.

    Args:
        url_patterns: Paths the filter applies to, as globs (``/api/*``).
            Empty applies it everywhere.
        exclude_patterns: Paths bypassed even when ``url_patterns`` match.
    """

    def __init__(
        self,
        url_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        self._scope = PathScope.of(url_patterns, exclude_patterns)

    @property
    def scope(self) -> PathScope:
        return self._scope

    def applies_to(self, path: str) -> bool:
        return self._scope.matches(path)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...
