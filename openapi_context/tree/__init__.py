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

"""Locating nodes of a document tree.

This package knows nothing about parsing; it works on any tree of
:class:`~openapi_context.models.node.ModelNode` objects, dicts and lists.
"""

from .json_pointers import (
    ROOT,
    JsonPointer,
    compile_pointer,
    convert_current_pointer,
    convert_legacy_pointer,
    error_to_pointer,
)
from .method_call_recorder import MethodCallRecorder, unwrap
from .reverse_ast import ReverseAst

__all__ = [
    "ROOT",
    "JsonPointer",
    "compile_pointer",
    "convert_current_pointer",
    "convert_legacy_pointer",
    "error_to_pointer",
    "MethodCallRecorder",
    "unwrap",
    "ReverseAst",
]
