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

"""Document tree of the legacy dialect (Swagger 2.0).

Vendor extensions live in ``vendor_extensions``. The legacy tree is never
resolved; ``$ref`` nodes stay in place so that pointers keep matching the
submitted document.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .node import ModelNode, entries_field, extensions_field, ref_field

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


@dataclass(eq=False)
class ExternalDocs(ModelNode):
    description: Optional[str] = None
    url: Optional[str] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Contact(ModelNode):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class License(ModelNode):
    name: Optional[str] = None
    url: Optional[str] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Info(ModelNode):
    title: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: Optional[str] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Tag(ModelNode):
    name: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Xml(ModelNode):
    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: Optional[bool] = None
    wrapped: Optional[bool] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Model(ModelNode):
    """Schema object; also used for non-body parameter ``items`` and response headers."""

    ref: Optional[str] = ref_field()
    title: Optional[str] = None
    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    enum: Optional[List[Any]] = None
    multiple_of: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = None
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    collection_format: Optional[str] = None
    required: Optional[List[str]] = None
    items: Optional[Model] = None
    all_of: Optional[List[Model]] = None
    properties: Optional[Dict[str, Model]] = None
    additional_properties: Optional[Union[Model, bool]] = None
    discriminator: Optional[str] = None
    read_only: Optional[bool] = None
    xml: Optional[Xml] = None
    external_docs: Optional[ExternalDocs] = None
    example: Any = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Parameter(ModelNode):
    """Body parameters carry ``schema``; all others describe a simple type inline."""

    ref: Optional[str] = ref_field()
    name: Optional[str] = None
    in_: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    schema: Optional[Model] = None
    type: Optional[str] = None
    format: Optional[str] = None
    allow_empty_value: Optional[bool] = None
    items: Optional[Model] = None
    collection_format: Optional[str] = None
    default: Any = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = None
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None
    enum: Optional[List[Any]] = None
    multiple_of: Optional[float] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Response(ModelNode):
    ref: Optional[str] = ref_field()
    description: Optional[str] = None
    schema: Optional[Model] = None
    headers: Optional[Dict[str, Model]] = None
    examples: Optional[Dict[str, Any]] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Operation(ModelNode):
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None
    operation_id: Optional[str] = None
    consumes: Optional[List[str]] = None
    produces: Optional[List[str]] = None
    parameters: Optional[List[Parameter]] = None
    responses: Optional[Dict[str, Response]] = entries_field()
    schemes: Optional[List[str]] = None
    deprecated: Optional[bool] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Path(ModelNode):
    ref: Optional[str] = ref_field()
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    parameters: Optional[List[Parameter]] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()

    def operation_map(self) -> Dict[str, Operation]:
        operations = OrderedDict()
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                operations[method] = operation
        return operations


@dataclass(eq=False)
class SecurityDefinition(ModelNode):
    """``basic``, ``apiKey`` or ``oauth2`` security scheme definition."""

    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    in_: Optional[str] = None
    flow: Optional[str] = None
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    scopes: Optional[Dict[str, str]] = None
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Swagger(ModelNode):
    swagger: Optional[str] = None
    info: Optional[Info] = None
    host: Optional[str] = None
    base_path: Optional[str] = None
    schemes: Optional[List[str]] = None
    consumes: Optional[List[str]] = None
    produces: Optional[List[str]] = None
    security_definitions: Optional[Dict[str, SecurityDefinition]] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    tags: Optional[List[Tag]] = None
    external_docs: Optional[ExternalDocs] = None
    definitions: Optional[Dict[str, Model]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    responses: Optional[Dict[str, Response]] = None
    paths: Optional[Dict[str, Path]] = entries_field()
    vendor_extensions: Optional[Dict[str, Any]] = extensions_field()
