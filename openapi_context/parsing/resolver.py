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

"""Full resolution of local ``$ref`` nodes in an OpenAPI 3 tree.

Every referable node (schema, parameter, request body, response, header,
example, link, security scheme) that carries a local ``$ref`` is replaced by
the node it points to. Replacement is by identity, so a definition used in
several places becomes one shared node, and a recursive schema becomes a cycle.

Every reference is looked up before any of them is replaced. A reference that
cannot be resolved is skipped and kept as a reference node; the others are
still replaced.
"""

from __future__ import annotations

import logging
from typing import Any, List, Set, Tuple

from ..exceptions import ReferenceResolutionError
from ..models.node import ModelNode
from ..models.openapi import REFERABLE_TYPES, OpenAPI
from ..tree.json_pointers import child_value, split_pointer

logger = logging.getLogger(__name__)

LOCAL_REF_PREFIX = "#"

# (container, attribute name | dict key | list index)
_Slot = Tuple[Any, Any]


def _assign(slot: _Slot, value: Any) -> None:
    container, key = slot
    if isinstance(container, ModelNode):
        setattr(container, key, value)
    else:
        container[key] = value


class ReferenceResolver:
    def __init__(self, openapi: OpenAPI):
        self._root = openapi
        self.skipped: List[ReferenceResolutionError] = []

    def resolve_fully(self) -> int:
        """Replace every resolvable ``$ref`` node; return the number replaced.

        References that are external, dangling, point at a node of another
        kind, or belong to a ``$ref`` chain that loops back on itself stay in
        place and are listed in ``skipped``.
        """
        plan: List[Tuple[_Slot, ModelNode]] = []
        for slot, node in self._referencing_slots():
            try:
                plan.append((slot, self._target_of(node)))
            except ReferenceResolutionError as exc:
                self.skipped.append(exc)

        for slot, target in plan:
            _assign(slot, target)

        logger.debug(f"Resolved {len(plan)} references, skipped {len(self.skipped)}")
        return len(plan)

    def _referencing_slots(self) -> List[Tuple[_Slot, ModelNode]]:
        slots: List[Tuple[_Slot, ModelNode]] = []
        visited: Set[int] = set()
        stack: List[Any] = [self._root]

        while stack:
            value = stack.pop()
            if id(value) in visited:
                continue
            visited.add(id(value))

            for slot, child in _child_slots(value):
                if isinstance(child, REFERABLE_TYPES) and child.ref:
                    slots.append((slot, child))
                if isinstance(child, (ModelNode, dict, list)):
                    stack.append(child)
        return slots

    def _target_of(self, node: ModelNode) -> ModelNode:
        chain: List[str] = []
        current = node
        while isinstance(current, REFERABLE_TYPES) and current.ref:
            if current.ref in chain:
                raise ReferenceResolutionError(
                    node.ref, "circular reference chain " + " -> ".join(chain + [current.ref])
                )
            chain.append(current.ref)
            current = self._lookup(current.ref)

        if type(current) is not type(node):
            raise ReferenceResolutionError(
                node.ref, f"expected {type(node).__name__}, found {type(current).__name__}"
            )
        return current

    def _lookup(self, ref: str) -> Any:
        if ref != LOCAL_REF_PREFIX and not ref.startswith(LOCAL_REF_PREFIX + "/"):
            raise ReferenceResolutionError(ref, "only local references are supported")

        current: Any = self._root
        for segment in split_pointer(ref[len(LOCAL_REF_PREFIX):]):
            current = child_value(current, segment)
            if current is None:
                raise ReferenceResolutionError(ref, f"no value at '{segment}'")
        return current


def _child_slots(value: Any) -> List[Tuple[_Slot, Any]]:
    if isinstance(value, ModelNode):
        return [
            ((value, f.name), getattr(value, f.name))
            for f in value.node_fields()
            if not f.extensions
        ]
    if isinstance(value, dict):
        return [((value, key), child) for key, child in value.items()]
    if isinstance(value, list):
        return [((value, index), child) for index, child in enumerate(value)]
    return []