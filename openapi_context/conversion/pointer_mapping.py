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

"""Swagger 2 pointers translated into the tree built by :class:`SwaggerConverter`.

The rename table of :mod:`openapi_context.tree.json_pointers` only renames
collections. The converter also moves nodes: a body parameter becomes a
request body, a response schema moves under ``content/<media type>``, an
oauth2 definition moves its settings under ``flows/<flow>``. Where a node
lands depends on the Swagger tree itself, so the translation reads it.
"""

from __future__ import annotations

from typing import List, Optional

from ..models import openapi as oas
from ..models import swagger as sw
from ..tree.json_pointers import JsonPointer, compile_pointer, convert_legacy_pointer, split_pointer
from .swagger_converter import OAUTH_FLOWS, consumed_media_types, form_media_types, produced_media_types

Segments = List[str]

_PARAMETERS_REF = "#/parameters/"
_BODY_LOCATIONS = ("body", "formData")

# Parameter keys the converter keeps on the parameter; the others describe its schema
_PARAMETER_KEYS = frozenset(("name", "in", "description", "required", "allowEmptyValue", "collectionFormat"))

_FLOW_KEYS = frozenset(("authorizationUrl", "tokenUrl", "scopes"))
_OAUTH_FLOW_KEYS = oas.OAuthFlows.field_keys()


def _index(segment: str, items: list) -> Optional[int]:
    if segment.isdigit() and int(segment) < len(items):
        return int(segment)
    return None


def _body_rest(rest: Segments, consumes: List[str]) -> Segments:
    if rest[:1] == ["schema"]:
        return ["content", consumes[0], "schema"] + rest[1:]
    return rest


def _parameter_rest(rest: Segments) -> Segments:
    if rest and rest[0] not in _PARAMETER_KEYS:
        return ["schema"] + rest
    return rest


def _response_rest(rest: Segments, produces: List[str]) -> Segments:
    if not rest:
        return rest
    key = rest[0]
    if key == "schema":
        return ["content", produces[0], "schema"] + rest[1:]
    if key == "examples" and len(rest) > 1:
        return ["content", rest[1], "example"] + rest[2:]
    if key == "headers" and len(rest) > 1:
        # A header keeps its description; everything else becomes its schema
        more = rest[2:]
        if more and more[0] != "description":
            more = ["schema"] + more
        return ["headers", rest[1]] + more
    return rest


class LegacyPointerMapper:
    """Translates pointers into one Swagger 2 tree into pointers into its conversion."""

    def __init__(self, swagger: sw.Swagger):
        self._swagger = swagger

    def to_current(self, pointer: JsonPointer) -> Optional[JsonPointer]:
        """Where the converter put the node at ``pointer``, or None if no rule applies.

        The result is where the node would be; it is not checked against the
        converted tree.
        """
        segments = split_pointer(pointer)
        mapped: Optional[Segments] = None
        if len(segments) > 1:
            head, name, rest = segments[0], segments[1], segments[2:]
            if head == "parameters":
                mapped = self._global_parameter(name, rest)
            elif head == "responses":
                mapped = ["components", "responses", name] + _response_rest(
                    rest, produced_media_types(self._swagger)
                )
            elif head == "securityDefinitions":
                mapped = self._security_definition(name, rest)
            elif head == "paths":
                mapped = self._path(name, rest)

        if mapped is None:
            return convert_legacy_pointer(pointer)
        return compile_pointer(mapped)

    # ---- parameters ---------------------------------------------------------

    def _effective(self, parameter: sw.Parameter) -> sw.Parameter:
        if parameter.ref and parameter.ref.startswith(_PARAMETERS_REF):
            target = (self._swagger.parameters or {}).get(parameter.ref[len(_PARAMETERS_REF):])
            if target is not None:
                return target
        return parameter

    def _plain_index(self, parameters: List[sw.Parameter], index: int) -> int:
        """Position of ``parameters[index]`` once body and form parameters are removed."""
        return sum(1 for p in parameters[:index] if self._effective(p).in_ not in _BODY_LOCATIONS)

    def _global_parameter(self, name: str, rest: Segments) -> Optional[Segments]:
        parameter = (self._swagger.parameters or {}).get(name)
        if parameter is None or parameter.in_ == "formData":
            return None
        if parameter.in_ == "body":
            return ["components", "requestBodies", name] + _body_rest(rest, consumed_media_types(self._swagger))
        return ["components", "parameters", name] + _parameter_rest(rest)

    # ---- security -----------------------------------------------------------

    def _security_definition(self, name: str, rest: Segments) -> Segments:
        prefix = ["components", "securitySchemes", name]
        definition = (self._swagger.security_definitions or {}).get(name)
        if definition is None or definition.type != "oauth2" or not rest or rest[0] not in _FLOW_KEYS:
            return prefix + rest
        flow = OAUTH_FLOWS.get(definition.flow)
        if flow is None:
            return prefix + rest
        return prefix + ["flows", _OAUTH_FLOW_KEYS[flow]] + rest

    # ---- paths --------------------------------------------------------------

    def _path(self, url: str, rest: Segments) -> Optional[Segments]:
        path = (self._swagger.paths or {}).get(url)
        if path is None or not rest:
            return None
        prefix = ["paths", url]
        key, more = rest[0], rest[1:]

        if key == "parameters" and more:
            shared = path.parameters or []
            index = _index(more[0], shared)
            if index is None or self._effective(shared[index]).in_ in _BODY_LOCATIONS:
                # Moved into the request body of every operation
                return None
            return prefix + ["parameters", str(self._plain_index(shared, index))] + _parameter_rest(more[1:])

        operation = path.operation_map().get(key)
        if operation is None or not more:
            return prefix + rest
        return self._operation(prefix + [key], operation, more)

    def _operation(self, prefix: Segments, operation: sw.Operation, rest: Segments) -> Optional[Segments]:
        key, more = rest[0], rest[1:]
        if key == "responses" and more:
            produces = produced_media_types(self._swagger, operation)
            return prefix + ["responses", more[0]] + _response_rest(more[1:], produces)
        if key != "parameters" or not more:
            return prefix + rest

        own = operation.parameters or []
        index = _index(more[0], own)
        if index is None:
            return None
        target = self._effective(own[index])
        tail = more[1:]
        consumes = consumed_media_types(self._swagger, operation)

        if target.in_ == "body":
            return prefix + ["requestBody"] + _body_rest(tail, consumes)
        if target.in_ == "formData":
            fields = [p for p in map(self._effective, own) if p.in_ == "formData"]
            media_type = form_media_types(fields, consumes)[0]
            return prefix + ["requestBody", "content", media_type, "schema", "properties", target.name] + tail
        return prefix + ["parameters", str(self._plain_index(own, index))] + _parameter_rest(tail)
