# Copyright 2026 TIER IV, inc.
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

"""Outcome of one pipeline stage.

* :class:`Success` carries the stage result and lets the next stage run.
* :class:`ParsedWithErrors` rejects the document with violations.
* :class:`NotApplicable` says the document is not in the dialect that was tried.

``map`` and ``flat_map`` short-circuit on anything but :class:`Success`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, List, TypeVar

from .violation import Violation

T = TypeVar("T")
R = TypeVar("R")


class ContentParseResult(Generic[T]):

    def map(self, fn: Callable[[T], R]) -> "ContentParseResult[R]":
        return self  # type: ignore[return-value]

    def flat_map(self, fn: Callable[[T], "ContentParseResult[R]"]) -> "ContentParseResult[R]":
        return self  # type: ignore[return-value]

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class Success(ContentParseResult[T]):
    result: T

    def map(self, fn: Callable[[T], R]) -> "ContentParseResult[R]":
        return Success(fn(self.result))

    def flat_map(self, fn: Callable[[T], ContentParseResult[R]]) -> ContentParseResult[R]:
        return fn(self.result)

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class ParsedWithErrors(ContentParseResult[T]):
    violations: List[Violation] = field(default_factory=list)


@dataclass(frozen=True)
class NotApplicable(ContentParseResult[T]):
    pass


# Name used throughout the documentation
ParseOutcome = ContentParseResult
