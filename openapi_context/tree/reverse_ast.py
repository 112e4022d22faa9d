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

"""Reverse index of a document tree: node identity → JSON pointer.

The index is built by one depth-first traversal. Traversal follows attribute
declaration order, dict insertion order and list order, and never enters a
node twice, so resolved references (shared nodes, cycles) are located at the
first path that reaches them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..config import context_config
from ..models.node import EXTENSION_ATTRIBUTES, ModelNode
from .json_pointers import ROOT, JsonPointer, ancestors, append

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Node:
    value: Any
    pointer: JsonPointer
    markers: FrozenSet[str] = frozenset()


def _marker_values(raw: Any) -> FrozenSet[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, (list, tuple, set)):
        return frozenset(str(item) for item in raw if item is not None)
    return frozenset([str(raw)])


class ReverseAst:
    """Read-only lookup of pointers by node identity and of suppression markers by pointer."""

    def __init__(self, objects_to_nodes: Dict[int, _Node], pointers_to_nodes: Dict[JsonPointer, _Node]):
        self._objects_to_nodes = objects_to_nodes
        self._pointers_to_nodes = pointers_to_nodes

    @staticmethod
    def builder(root: Any) -> "ReverseAstBuilder":
        return ReverseAstBuilder(root)

    def __len__(self) -> int:
        return len(self._objects_to_nodes)

    def __contains__(self, value: Any) -> bool:
        return self.get_pointer(value) is not None

    def get_pointer(self, value: Any) -> Optional[JsonPointer]:
        node = self._objects_to_nodes.get(id(value))
        if node is None or node.value is not value:
            return None
        return node.pointer

    def get_value(self, pointer: JsonPointer) -> Any:
        node = self._pointers_to_nodes.get(pointer)
        return node.value if node is not None else None

    def pointers(self) -> Iterable[JsonPointer]:
        return self._pointers_to_nodes.keys()

    def get_ignore_values(self, pointer: JsonPointer) -> Set[str]:
        """Rule ids suppressed at ``pointer``, including those inherited from enclosing nodes."""
        values: Set[str] = set()
        for current in ancestors(pointer):
            node = self._pointers_to_nodes.get(current)
            if node is not None:
                values.update(node.markers)
        return values

    def is_ignored(self, pointer: JsonPointer, rule_id: str) -> bool:
        for current in ancestors(pointer):
            node = self._pointers_to_nodes.get(current)
            if node is not None and rule_id in node.markers:
                return True
        return False


class ReverseAstBuilder:
    def __init__(self, root: Any):
        self._root = root
        self._extension_names: Tuple[str, ...] = EXTENSION_ATTRIBUTES
        self._ignore_extension = context_config.ignore_extension

    def with_extension_method_names(self, *names: str) -> "ReverseAstBuilder":
        self._extension_names = tuple(names)
        return self

    def with_ignore_extension(self, key: str) -> "ReverseAstBuilder":
        self._ignore_extension = key
        return self

    def build(self) -> ReverseAst:
        objects_to_nodes: Dict[int, _Node] = {}
        pointers_to_nodes: Dict[JsonPointer, _Node] = {}

        # Explicit stack; children are pushed in reverse to keep pre-order.
        stack: List[Tuple[Any, JsonPointer]] = [(self._root, ROOT)]
        while stack:
            value, pointer = stack.pop()
            if id(value) in objects_to_nodes:
                continue

            node = _Node(value=value, pointer=pointer, markers=self._markers(value))
            objects_to_nodes[id(value)] = node
            pointers_to_nodes.setdefault(pointer, node)

            children = list(self._children(value, pointer))
            stack.extend(reversed(children))

        logger.debug(f"Indexed {len(objects_to_nodes)} nodes of {type(self._root).__name__}")
        return ReverseAst(objects_to_nodes, pointers_to_nodes)

    def _markers(self, value: Any) -> FrozenSet[str]:
        if not isinstance(value, ModelNode) or not self._ignore_extension:
            return frozenset()
        for name in self._extension_names:
            extensions = getattr(value, name, None)
            if isinstance(extensions, dict) and self._ignore_extension in extensions:
                return _marker_values(extensions[self._ignore_extension])
        return frozenset()

    def _children(self, value: Any, pointer: JsonPointer) -> Iterable[Tuple[Any, JsonPointer]]:
        if isinstance(value, ModelNode):
            for f in value.node_fields():
                if f.name in self._extension_names:
                    continue
                child = getattr(value, f.name)
                if _is_indexable(child):
                    yield child, append(pointer, f.key)
        elif isinstance(value, dict):
            for key, child in value.items():
                if _is_indexable(child):
                    yield child, append(pointer, key)
        elif isinstance(value, list):
            for index, child in enumerate(value):
                if _is_indexable(child):
                    yield child, append(pointer, index)


def _is_indexable(value: Any) -> bool:
    return isinstance(value, (ModelNode, dict, list))
