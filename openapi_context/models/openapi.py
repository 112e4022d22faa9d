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

"""Document tree of the current dialect (OpenAPI 3.x).

Attribute order is traversal order: ``components`` precedes ``paths`` so that
resolved, shared nodes are located at their definition.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .node import ModelNode, entries_field, extensions_field, ref_field


class HttpMethod(str, Enum):
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


@dataclass(eq=False)
class ExternalDocumentation(ModelNode):
    description: Optional[str] = None
    url: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Contact(ModelNode):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class License(ModelNode):
    name: Optional[str] = None
    url: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Info(ModelNode):
    title: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class ServerVariable(ModelNode):
    enum: Optional[List[str]] = None
    default: Optional[str] = None
    description: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Server(ModelNode):
    url: Optional[str] = None
    description: Optional[str] = None
    variables: Optional[Dict[str, ServerVariable]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Tag(ModelNode):
    name: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocumentation] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Discriminator(ModelNode):
    property_name: Optional[str] = None
    mapping: Optional[Dict[str, str]] = None


@dataclass(eq=False)
class XML(ModelNode):
    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: Optional[bool] = None
    wrapped: Optional[bool] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Schema(ModelNode):
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
    required: Optional[List[str]] = None
    items: Optional[Schema] = None
    all_of: Optional[List[Schema]] = None
    one_of: Optional[List[Schema]] = None
    any_of: Optional[List[Schema]] = None
    not_: Optional[Schema] = None
    properties: Optional[Dict[str, Schema]] = None
    additional_properties: Optional[Union[Schema, bool]] = None
    nullable: Optional[bool] = None
    discriminator: Optional[Discriminator] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None
    xml: Optional[XML] = None
    external_docs: Optional[ExternalDocumentation] = None
    example: Any = None
    deprecated: Optional[bool] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Example(ModelNode):
    ref: Optional[str] = ref_field()
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    external_value: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Header(ModelNode):
    ref: Optional[str] = ref_field()
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    schema: Optional[Schema] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    content: Optional[Dict[str, MediaType]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Encoding(ModelNode):
    content_type: Optional[str] = None
    headers: Optional[Dict[str, Header]] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class MediaType(ModelNode):
    schema: Optional[Schema] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    encoding: Optional[Dict[str, Encoding]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Parameter(ModelNode):
    ref: Optional[str] = ref_field()
    name: Optional[str] = None
    in_: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None
    schema: Optional[Schema] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    content: Optional[Dict[str, MediaType]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class RequestBody(ModelNode):
    ref: Optional[str] = ref_field()
    description: Optional[str] = None
    content: Optional[Dict[str, MediaType]] = None
    required: Optional[bool] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Link(ModelNode):
    ref: Optional[str] = ref_field()
    operation_ref: Optional[str] = None
    operation_id: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    request_body: Any = None
    description: Optional[str] = None
    server: Optional[Server] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class ApiResponse(ModelNode):
    ref: Optional[str] = ref_field()
    description: Optional[str] = None
    headers: Optional[Dict[str, Header]] = None
    content: Optional[Dict[str, MediaType]] = None
    links: Optional[Dict[str, Link]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Operation(ModelNode):
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocumentation] = None
    operation_id: Optional[str] = None
    parameters: Optional[List[Parameter]] = None
    request_body: Optional[RequestBody] = None
    responses: Optional[Dict[str, ApiResponse]] = entries_field()
    callbacks: Optional[Dict[str, Any]] = None
    deprecated: Optional[bool] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    servers: Optional[List[Server]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class PathItem(ModelNode):
    ref: Optional[str] = ref_field()
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[List[Server]] = None
    parameters: Optional[List[Parameter]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()

    def read_operations(self) -> List[Operation]:
        return list(self.read_operations_map().values())

    def read_operations_map(self) -> Dict[HttpMethod, Operation]:
        """Operations of this path item keyed by method, in declaration order."""
        operations = OrderedDict()
        for method in HttpMethod:
            operation = getattr(self, method.value)
            if operation is not None:
                operations[method] = operation
        return operations


@dataclass(eq=False)
class OAuthFlow(ModelNode):
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    refresh_url: Optional[str] = None
    scopes: Optional[Dict[str, str]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class OAuthFlows(ModelNode):
    implicit: Optional[OAuthFlow] = None
    password: Optional[OAuthFlow] = None
    client_credentials: Optional[OAuthFlow] = None
    authorization_code: Optional[OAuthFlow] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class SecurityScheme(ModelNode):
    ref: Optional[str] = ref_field()
    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    in_: Optional[str] = None
    scheme: Optional[str] = None
    bearer_format: Optional[str] = None
    flows: Optional[OAuthFlows] = None
    open_id_connect_url: Optional[str] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class Components(ModelNode):
    schemas: Optional[Dict[str, Schema]] = None
    responses: Optional[Dict[str, ApiResponse]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    examples: Optional[Dict[str, Example]] = None
    request_bodies: Optional[Dict[str, RequestBody]] = None
    headers: Optional[Dict[str, Header]] = None
    security_schemes: Optional[Dict[str, SecurityScheme]] = None
    links: Optional[Dict[str, Link]] = None
    callbacks: Optional[Dict[str, Any]] = None
    extensions: Optional[Dict[str, Any]] = extensions_field()


@dataclass(eq=False)
class OpenAPI(ModelNode):
    openapi: Optional[str] = None
    info: Optional[Info] = None
    external_docs: Optional[ExternalDocumentation] = None
    servers: Optional[List[Server]] = None
    security: Optional[List[Dict[str, List[str]]]] = None
    tags: Optional[List[Tag]] = None
    components: Optional[Components] = None
    paths: Optional[Dict[str, PathItem]] = entries_field()
    extensions: Optional[Dict[str, Any]] = extensions_field()


# Nodes that may carry a local $ref replaced during full resolution
REFERABLE_TYPES = (Schema, Parameter, RequestBody, ApiResponse, Header, Example, Link, SecurityScheme)
