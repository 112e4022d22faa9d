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

"""Records how a rule navigates the document tree.

``MethodCallRecorder(root).proxy`` behaves like ``root`` but every attribute
read, key lookup and iteration step updates the recorder's ``pointer`` to the
location of the value just produced. A rule that reports a violation right after
looking at a value therefore gets that value's location for free.

The recorded pointer is only as good as the access pattern: a rule that keeps a
proxy around and reports against it later gets the location of whatever was
accessed last.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from typing import Any, Iterator, List, Set, Tuple

from ..models.node import ModelNode
from .json_pointers import JsonPointer, compile_pointer

Segments = Tuple[Any, ...]


class MethodCallRecorder:
    def __init__(self, obj: Any):
        self._obj = obj
        self._skip_methods: Set[str] = set()
        self._location: Segments = ()
        self.proxy = self._wrap(obj, ())

    def skip_methods(self, *names: str) -> "MethodCallRecorder":
        """Attributes returned as-is and never recorded (vendor extensions)."""
        self._skip_methods.update(names)
        return self

    @property
    def pointer(self) -> JsonPointer:
        return compile_pointer(self._location)

    def _record(self, segments: Segments) -> None:
        self._location = segments

    def _wrap(self, value: Any, segments: Segments) -> Any:
        if isinstance(value, ModelNode):
            return _NodeProxy(self, value, segments)
        if isinstance(value, dict):
            return _MappingProxy(self, value, segments)
        if isinstance(value, list):
            return _SequenceProxy(self, value, segments)
        return value


def unwrap(value: Any) -> Any:
    """The tree node behind a proxy; other values are returned unchanged."""
    if isinstance(value, _Proxy):
        return object.__getattribute__(value, "_target")
    return value


class _Proxy:
    __slots__ = ("_recorder", "_target", "_segments")

    def __init__(self, recorder: MethodCallRecorder, target: Any, segments: Segments):
        object.__setattr__(self, "_recorder", recorder)
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_segments", segments)

    def _child(self, segment: Any, value: Any) -> Any:
        segments = self._segments + (segment,)
        self._recorder._record(segments)
        return self._recorder._wrap(value, segments)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self._target).__name__} is read-only through the recorder")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self._target).__name__} is read-only through the recorder")

    def __eq__(self, other: Any) -> bool:
        return self._target == unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self._target)

    def __repr__(self) -> str:
        return f"<recorded {type(self._target).__name__} at '{compile_pointer(self._segments)}'>"


class _NodeProxy(_Proxy):
    __slots__ = ()

    # Lets isinstance() see the proxied model class.
    @property
    def __class__(self):
        return type(self._target)

    def __getattr__(self, name: str) -> Any:
        target = self._target
        value = getattr(target, name)
        if name in self._recorder._skip_methods or name.startswith("_"):
            return value

        key = type(target).field_keys().get(name)
        if key is not None:
            return self._child(key, value)

        if callable(value):
            return self._call_through(value)
        return value

    def _call_through(self, method):
        @functools.wraps(method)
        def recorded(*args, **kwargs):
            result = method(*args, **kwargs)
            self._recorder._record(self._segments)
            return self._recorder._wrap(result, self._segments)
        return recorded

    def __bool__(self) -> bool:
        return True


class _MappingProxy(_Proxy, Mapping):
    __slots__ = ()

    def __getitem__(self, key: Any) -> Any:
        value = self._target[key]
        return self._child(key, value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._target)

    def __len__(self) -> int:
        return len(self._target)

    def __contains__(self, key: Any) -> bool:
        return key in self._target

    def keys(self):
        return self._target.keys()

    def items(self) -> Iterator[Tuple[Any, Any]]:
        for key, value in self._target.items():
            yield key, self._child(key, value)

    def values(self) -> Iterator[Any]:
        for key, value in self._target.items():
            yield self._child(key, value)

    __hash__ = _Proxy.__hash__


class _SequenceProxy(_Proxy, Sequence):
    __slots__ = ()

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            positions = range(len(self._target))[index]
            return [self._recorder._wrap(self._target[i], self._segments + (i,)) for i in positions]
        if index < 0:
            index += len(self._target)
        value = self._target[index]
        return self._child(index, value)

    def __iter__(self) -> Iterator[Any]:
        for index, value in enumerate(self._target):
            yield self._child(index, value)

    def __len__(self) -> int:
        return len(self._target)

    def __contains__(self, item: Any) -> bool:
        item = unwrap(item)
        return any(value is item or value == item for value in self._target)

    __hash__ = _Proxy.__hash__
