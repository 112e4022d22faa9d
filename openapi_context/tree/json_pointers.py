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

"""JSON pointer helpers and the Swagger 2 / OpenAPI 3 pointer rename tables."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Iterable, List, Optional, Pattern, Sequence, Tuple

from ..models.node import ModelNode

JsonPointer = str

ROOT: JsonPointer = ""


def escape(token: Any) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    if isinstance(token, Enum):
        token = token.value
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def compile_pointer(segments: Iterable[Any]) -> JsonPointer:
    """Render raw (unescaped) segments as a pointer; no segments is the root."""
    return "".join(f"/{escape(segment)}" for segment in segments)


def append(pointer: JsonPointer, segment: Any) -> JsonPointer:
    return f"{pointer}/{escape(segment)}"


def split_pointer(pointer: JsonPointer) -> List[str]:
    if not pointer:
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer '{pointer}': must be empty or start with '/'")
    return [unescape(token) for token in pointer[1:].split("/")]


def parent(pointer: JsonPointer) -> Optional[JsonPointer]:
    """Pointer of the enclosing node, or None for the root."""
    if not pointer:
        return None
    return pointer[:pointer.rindex("/")]


def ancestors(pointer: JsonPointer) -> Iterable[JsonPointer]:
    """Yield ``pointer`` and every enclosing pointer up to and including the root."""
    current: Optional[JsonPointer] = pointer
    while current is not None:
        yield current
        current = parent(current)


# ---- navigation -----------------------------------------------------------

def child_value(value: Any, segment: str) -> Any:
    """The child of ``value`` named by one unescaped segment, or None.

    Model nodes are addressed by JSON key; their extension attributes are not
    addressable.
    """
    if isinstance(value, ModelNode):
        for f in value.node_fields():
            if f.key == segment and not f.extensions:
                return getattr(value, f.name)
        return None
    if isinstance(value, dict):
        return value.get(segment)
    if isinstance(value, list) and segment.isdigit():
        index = int(segment)
        return value[index] if index < len(value) else None
    return None


def value_at(root: Any, pointer: JsonPointer) -> Any:
    """The value ``pointer`` addresses below ``root``, or None if there is none."""
    current = root
    for segment in split_pointer(pointer):
        current = child_value(current, segment)
        if current is None:
            return None
    return current


# ---- dialect reconciliation -----------------------------------------------

_Rule = Tuple[Pattern[str], str]


def _rules(table: Sequence[Tuple[str, str]]) -> List[_Rule]:
    return [(re.compile(pattern), replacement) for pattern, replacement in table]


# Swagger 2 → OpenAPI 3: collections renamed by the converter
_LEGACY_TO_CURRENT = _rules([
    (r"^/definitions(/.*)?$", r"/components/schemas\1"),
    (r"^/parameters(/.*)?$", r"/components/parameters\1"),
    (r"^/responses(/.*)?$", r"/components/responses\1"),
    (r"^/securityDefinitions(/.*)?$", r"/components/securitySchemes\1"),
    (r"^/(?:host|basePath|schemes)(?:/.*)?$", r"/servers"),
])

# OpenAPI 3 → Swagger 2: used to find converted nodes in the submitted text
_CURRENT_TO_LEGACY = _rules([
    (r"^/components/schemas(/.*)?$", r"/definitions\1"),
    (r"^/components/parameters(/.*)?$", r"/parameters\1"),
    (r"^/components/requestBodies(/[^/]+)(?:/.*)?$", r"/parameters\1"),
    (r"^/components/responses(/[^/]+)/content/[^/]+(/.*)?$", r"/responses\1\2"),
    (r"^/components/responses(/.*)?$", r"/responses\1"),
    (r"^/components/securitySchemes(/[^/]+)/flows/[^/]+(/.*)?$", r"/securityDefinitions\1\2"),
    (r"^/components/securitySchemes(/.*)?$", r"/securityDefinitions\1"),
    (r"^(/paths/[^/]+/[^/]+/responses/[^/]+)/content/[^/]+(/.*)?$", r"\1\2"),
    (r"^(/paths/[^/]+/[^/]+)/requestBody(?:/.*)?$", r"\1/parameters"),
    (r"^/servers(?:/.*)?$", r"/host"),
])


def _convert(rules: List[_Rule], pointer: Optional[JsonPointer]) -> Optional[JsonPointer]:
    if pointer is None:
        return None
    for pattern, replacement in rules:
        if pattern.match(pointer):
            return pattern.sub(replacement, pointer, count=1)
    return None


def convert_legacy_pointer(pointer: Optional[JsonPointer]) -> Optional[JsonPointer]:
    """Translate a Swagger 2 pointer into OpenAPI 3 addressing, or None if no rule applies."""
    return _convert(_LEGACY_TO_CURRENT, pointer)


def convert_current_pointer(pointer: Optional[JsonPointer]) -> Optional[JsonPointer]:
    """Translate an OpenAPI 3 pointer into Swagger 2 addressing, or None if no rule applies."""
    return _convert(_CURRENT_TO_LEGACY, pointer)


# ---- parser messages ------------------------------------------------------

_ATTRIBUTE_IS_MISSING = re.compile(r"attribute [^ ]* is missing")


def error_to_pointer(error: str) -> JsonPointer:
    """Best-effort location of a parser message.

    ``attribute info.title is missing`` → ``/info``: the dotted path minus its
    last segment. Every other message shape maps to the root.
    """
    if _ATTRIBUTE_IS_MISSING.fullmatch(error):
        path_in_error = error.split(" ")[1]
        path_parts = path_in_error.split(".")
        return compile_pointer(path_parts[:-1])
    return ROOT
