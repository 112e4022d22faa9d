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

"""Base class for document tree nodes.

A document tree is a graph of dataclasses. Each attribute of a node knows the
JSON key it is read from, which is what lets the reverse index and the call
recorder express locations as JSON pointers. Nodes compare by identity.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

EXTENSION_PREFIX = "x-"

# Attribute names holding vendor extensions in the current and legacy models
EXTENSION_ATTRIBUTES = ("extensions", "vendor_extensions")


class FieldShape(str, Enum):
    VALUE = "value"
    MODEL = "model"
    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class NodeField:
    name: str
    key: str
    shape: FieldShape
    model: Optional[Type["ModelNode"]] = None
    # MODEL fields whose type also admits plain values (e.g. additionalProperties: bool)
    allows_value: bool = False
    extensions: bool = False
    # MAP fields whose x- keys are extensions of the map itself (paths, responses)
    skip_extension_keys: bool = False


def json_key(name: str) -> str:
    """``operation_id`` → ``operationId``; a trailing underscore is dropped (``in_``)."""
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def ref_field():
    return field(default=None, metadata={"key": "$ref"})


def extensions_field():
    return field(default=None, metadata={"extensions": True})


def entries_field():
    return field(default=None, metadata={"skip_extension_keys": True})


def is_extension_key(key: Any) -> bool:
    return isinstance(key, str) and key.startswith(EXTENSION_PREFIX)


def _is_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, ModelNode)


def _describe(hint: Any) -> Tuple[FieldShape, Optional[type], bool]:
    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Union:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return _describe(members[0])
        models = [a for a in members if _is_model(a)]
        if models:
            return FieldShape.MODEL, models[0], True
        return FieldShape.VALUE, None, False

    if _is_model(hint):
        return FieldShape.MODEL, hint, False

    if origin is list:
        item = args[0] if args else None
        return FieldShape.LIST, item if _is_model(item) else None, False

    if origin is dict:
        item = args[1] if len(args) > 1 else None
        return FieldShape.MAP, item if _is_model(item) else None, False

    return FieldShape.VALUE, None, False


_FIELD_CACHE: Dict[type, Tuple[NodeField, ...]] = {}


class ModelNode:
    """Common behaviour for the dataclasses of both dialect models."""

    @classmethod
    def node_fields(cls) -> Tuple[NodeField, ...]:
        cached = _FIELD_CACHE.get(cls)
        if cached is not None:
            return cached

        hints = get_type_hints(cls)
        node_fields = []
        for f in dataclasses.fields(cls):
            shape, model, allows_value = _describe(hints.get(f.name, Any))
            node_fields.append(
                NodeField(
                    name=f.name,
                    key=f.metadata.get("key", json_key(f.name)),
                    shape=shape,
                    model=model,
                    allows_value=allows_value,
                    extensions=bool(f.metadata.get("extensions", False)),
                    skip_extension_keys=bool(f.metadata.get("skip_extension_keys", False)),
                )
            )
        cached = tuple(node_fields)
        _FIELD_CACHE[cls] = cached
        return cached

    @classmethod
    def field_keys(cls) -> Dict[str, str]:
        """Attribute name → JSON key, excluding the extensions attribute."""
        return {f.name: f.key for f in cls.node_fields() if not f.extensions}

    @classmethod
    def from_dict(cls, data: Any):
        """Build a node from loaded YAML/JSON data.

        Values of the wrong type are dropped; reporting them is the job of the
        structural schema validation.
        """
        if not isinstance(data, dict):
            return None

        values: Dict[str, Any] = {}
        for f in cls.node_fields():
            if f.extensions:
                extensions = {k: v for k, v in data.items() if is_extension_key(k)}
                if extensions:
                    values[f.name] = extensions
                continue
            if f.key not in data:
                continue
            value = _build_value(f, data[f.key])
            if value is not None:
                values[f.name] = value
            else:
                logger.debug(f"Dropped attribute '{f.key}' of {cls.__name__}: {data[f.key]!r}")
        return cls(**values)


def _build_item(model: Optional[type], raw: Any) -> Any:
    if model is None:
        return raw
    return model.from_dict(raw)


def _build_value(f: NodeField, raw: Any) -> Any:
    if raw is None:
        return None

    if f.shape == FieldShape.MODEL:
        if isinstance(raw, dict):
            return f.model.from_dict(raw)
        return raw if f.allows_value else None

    if f.shape == FieldShape.LIST:
        if not isinstance(raw, list):
            return None
        items = [_build_item(f.model, item) for item in raw]
        return [item for item in items if item is not None]

    if f.shape == FieldShape.MAP:
        if not isinstance(raw, dict):
            return None
        entries = {}
        for key, value in raw.items():
            if f.skip_extension_keys and is_extension_key(key):
                continue
            item = _build_item(f.model, value)
            if item is not None:
                entries[str(key)] = item
        return entries

    return raw
