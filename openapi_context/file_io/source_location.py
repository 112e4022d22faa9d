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
from pathlib import Path
from typing import Dict, Optional

from ..tree.json_pointers import JsonPointer, ancestors


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    pointer: Optional[JsonPointer] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], pointer: Optional[JsonPointer]) -> SourceLocation:
    """Location of ``pointer``, or of its nearest enclosing node present in the source map."""
    if not source_map or pointer is None:
        return SourceLocation(pointer=pointer)

    for candidate in ancestors(pointer):
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(
                pointer=pointer,
                line=entry.get("line"),
                column=entry.get("column"),
            )

    return SourceLocation(pointer=pointer)


def with_file(loc: SourceLocation, file_path: Optional[Path]) -> SourceLocation:
    return SourceLocation(
        file_path=Path(file_path) if file_path is not None else None,
        pointer=loc.pointer,
        line=loc.line,
        column=loc.column,
    )
