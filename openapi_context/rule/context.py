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

"""The context handed to rules.

A rule navigates ``context.api`` (an OpenAPI 3 tree seen through a
:class:`~openapi_context.tree.MethodCallRecorder`) and creates violations.
A violation is located, in order of preference, by:

1. an explicit pointer,
2. the pointer of an explicit tree node, looked up in the reverse indexes,
3. the location of the last value the rule read through ``context.api``.

Documents submitted as Swagger 2 keep their original tree next to the
converted one. Nodes missing from the converted tree are looked up in the
original tree and their pointers translated to the node the converter built
from them.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any, Callable, Iterable, List, Optional

from ..conversion.pointer_mapping import LegacyPointerMapper
from ..file_io.source_location import SourceLocation, lookup_source
from ..models.node import EXTENSION_ATTRIBUTES
from ..models.openapi import HttpMethod, OpenAPI, Operation, PathItem
from ..models.swagger import Swagger
from ..parsing.yaml_parser import SourceMap, yaml_parser
from ..tree.json_pointers import JsonPointer, convert_current_pointer, error_to_pointer, value_at
from ..tree.method_call_recorder import MethodCallRecorder, unwrap
from ..tree.reverse_ast import ReverseAst
from .violation import Violation

logger = logging.getLogger(__name__)

ViolationResults = Optional[Iterable[Optional[Violation]]]
PathFilter = Callable[[str, PathItem], bool]
PathAction = Callable[[str, PathItem], ViolationResults]
OperationFilter = Callable[[HttpMethod, Operation], bool]
OperationAction = Callable[[HttpMethod, Operation], ViolationResults]


def _collect(results: ViolationResults) -> List[Violation]:
    return [violation for violation in (results or []) if violation is not None]


class DefaultContext:
    # Attributes holding vendor extensions; never indexed nor recorded
    EXTENSION_NAMES = EXTENSION_ATTRIBUTES

    def __init__(
        self,
        source: str,
        openapi: OpenAPI,
        swagger: Optional[Swagger] = None,
        messages: Optional[List[str]] = None,
        conversion_messages: Optional[List[str]] = None,
    ):
        self._source = source
        self._openapi = openapi
        self._swagger = swagger
        self._messages = list(messages or [])
        self._conversion_messages = list(conversion_messages or [])
        self._legacy_pointers = LegacyPointerMapper(swagger) if swagger is not None else None
        self._recorder = MethodCallRecorder(openapi).skip_methods(*self.EXTENSION_NAMES)

    @property
    def source(self) -> str:
        return self._source

    @property
    def api(self) -> OpenAPI:
        """The OpenAPI 3 tree; reads through it move the recorded location."""
        return self._recorder.proxy

    @property
    def swagger(self) -> Optional[Swagger]:
        """The Swagger 2 tree the document was converted from, if any (not recorded)."""
        return self._swagger

    @property
    def messages(self) -> List[str]:
        """Parser and converter diagnostics that did not prevent building the tree."""
        return self._messages + self._conversion_messages

    @property
    def recorded_pointer(self) -> JsonPointer:
        return self._recorder.pointer

    @cached_property
    def openapi_ast(self) -> ReverseAst:
        return ReverseAst.builder(self._openapi).with_extension_method_names(*self.EXTENSION_NAMES).build()

    @cached_property
    def swagger_ast(self) -> Optional[ReverseAst]:
        if self._swagger is None:
            return None
        return ReverseAst.builder(self._swagger).with_extension_method_names(*self.EXTENSION_NAMES).build()

    @cached_property
    def source_map(self) -> SourceMap:
        return yaml_parser.build_source_map(self._source)

    def is_openapi3(self) -> bool:
        """True unless the document was submitted as Swagger 2."""
        return self._swagger is None

    def validate_paths(
        self,
        action: PathAction,
        path_filter: Optional[PathFilter] = None,
    ) -> List[Violation]:
        """Apply ``action(path, path_item)`` to every path accepted by ``path_filter``.

        ``None`` entries and empty results are discarded.
        """
        violations: List[Violation] = []
        for path, path_item in (self.api.paths or {}).items():
            if path_filter is not None and not path_filter(path, path_item):
                continue
            violations.extend(_collect(action(path, path_item)))
        return violations

    def validate_operations(
        self,
        action: OperationAction,
        path_filter: Optional[PathFilter] = None,
        operation_filter: Optional[OperationFilter] = None,
    ) -> List[Violation]:
        """Apply ``action(method, operation)`` to every accepted operation of every accepted path."""
        def per_path(path: str, path_item: PathItem) -> List[Violation]:
            violations: List[Violation] = []
            for method, operation in path_item.read_operations_map().items():
                if operation_filter is not None and not operation_filter(method, operation):
                    continue
                violations.extend(_collect(action(method, operation)))
            return violations

        return self.validate_paths(per_path, path_filter)

    def violation(
        self,
        description: str,
        value: Any = None,
        pointer: Optional[JsonPointer] = None,
    ) -> Violation:
        if pointer is None and value is not None:
            pointer = self.pointer_for_value(value)
        if pointer is None:
            pointer = self._recorder.pointer
        return Violation(description, pointer)

    def violations(
        self,
        description: str,
        value: Any = None,
        pointer: Optional[JsonPointer] = None,
    ) -> List[Violation]:
        return [self.violation(description, value, pointer)]

    def pointer_for_value(self, value: Any) -> Optional[JsonPointer]:
        value = unwrap(value)
        pointer = self.openapi_ast.get_pointer(value)
        if pointer is not None or self.swagger_ast is None:
            return pointer

        legacy_pointer = self.swagger_ast.get_pointer(value)
        if legacy_pointer is None:
            return None
        converted = self._converted_pointer(legacy_pointer)
        return converted if converted is not None else legacy_pointer

    def _converted_pointer(self, legacy_pointer: JsonPointer) -> Optional[JsonPointer]:
        # Only pointers that address a value of the converted tree
        pointer = self._legacy_pointers.to_current(legacy_pointer)
        if pointer is None:
            return None
        counterpart = value_at(self._openapi, pointer)
        if counterpart is None:
            return None
        return self.openapi_ast.get_pointer(counterpart) or pointer

    def is_ignored(self, pointer: JsonPointer, rule_id: str) -> bool:
        """Whether ``rule_id`` is suppressed at ``pointer`` in the submitted document."""
        ast = self.swagger_ast if self.swagger_ast is not None else self.openapi_ast
        return ast.is_ignored(pointer, rule_id)

    def location_of(self, pointer: Optional[JsonPointer]) -> SourceLocation:
        """Line and column of ``pointer`` in ``source``, or of its nearest located ancestor."""
        source_pointer = pointer
        if self._swagger is not None and pointer is not None:
            legacy_pointer = convert_current_pointer(pointer)
            if legacy_pointer is not None:
                source_pointer = legacy_pointer
        return lookup_source(self.source_map, source_pointer)

    def message_location(self, message: str) -> SourceLocation:
        """Location of one of ``messages`` in ``source``.

        Parser messages address the submitted tree; converter messages address
        the converted one.
        """
        pointer = error_to_pointer(message)
        if message in self._conversion_messages:
            return self.location_of(pointer)
        return lookup_source(self.source_map, pointer)
