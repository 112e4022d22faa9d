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

"""Document tree models for both dialects.

The current dialect lives in :mod:`.openapi`, the legacy dialect in
:mod:`.swagger`. Both share the :class:`~.node.ModelNode` machinery.
"""

from .node import ModelNode, NodeField, FieldShape, is_extension_key
from .openapi import OpenAPI, HttpMethod
from .swagger import Swagger

__all__ = [
    "ModelNode",
    "NodeField",
    "FieldShape",
    "is_extension_key",
    "OpenAPI",
    "HttpMethod",
    "Swagger",
]
