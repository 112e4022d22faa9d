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

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..tree.json_pointers import ROOT, JsonPointer, error_to_pointer

UNABLE_TO_PARSE = "Unable to parse specification"


@dataclass(frozen=True)
class Violation:
    description: str
    pointer: Optional[JsonPointer] = None


def error_to_violation(error: str) -> Violation:
    """Violation for a parser or converter message, located by :func:`error_to_pointer`."""
    return Violation(error, error_to_pointer(error))


def unable_to_parse() -> Violation:
    return Violation(UNABLE_TO_PARSE, ROOT)
