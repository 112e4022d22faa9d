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

"""Conversion of a Swagger 2.0 tree into an OpenAPI 3.0 tree.

The converted tree is new: no node of the Swagger tree is reused, so the two
trees can be indexed independently. ``$ref`` values are rewritten into the
``components`` namespace but left unresolved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ConversionError
from ..models import openapi as oas
from ..models import swagger as sw

logger = logging.getLogger(__name__)

CONVERTED_OPENAPI_VERSION = "3.0.1"

DEFAULT_MEDIA_TYPE = "application/json"
FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM = "multipart/form-data"
FORM_MEDIA_TYPES = (FORM_URLENCODED, MULTIPART_FORM)

NULLABLE_EXTENSION = "x-nullable"

# Swagger 2 oauth2 flow → OpenAPI 3 OAuthFlows attribute
OAUTH_FLOWS = {
    "implicit": "implicit",
    "password": "password",
    "application": "client_credentials",
    "accessCode": "authorization_code",
}

# collectionFormat → (style, explode) for query and formData parameters
COLLECTION_FORMATS = {
    "csv": ("form", False),
    "ssv": ("spaceDelimited", False),
    "pipes": ("pipeDelimited", False),
    "multi": ("form", True),
}

_REF_NAMESPACES = (
    ("#/definitions/", "#/components/schemas/"),
    ("#/responses/", "#/components/responses/"),
)
_PARAMETERS_REF = "#/parameters/"


def consumed_media_types(swagger: sw.Swagger, operation: Optional[sw.Operation] = None) -> List[str]:
    if operation is not None and operation.consumes:
        return list(operation.consumes)
    return list(swagger.consumes or [DEFAULT_MEDIA_TYPE])


def produced_media_types(swagger: sw.Swagger, operation: Optional[sw.Operation] = None) -> List[str]:
    if operation is not None and operation.produces:
        return list(operation.produces)
    return list(swagger.produces or [DEFAULT_MEDIA_TYPE])


def form_media_types(fields: List[sw.Parameter], consumes: List[str]) -> List[str]:
    """Media types of the request body built from ``formData`` fields."""
    media_types = [media_type for media_type in consumes if media_type in FORM_MEDIA_TYPES]
    if media_types:
        return media_types
    has_file = any(f.type == "file" for f in fields)
    return [MULTIPART_FORM if has_file else FORM_URLENCODED]


def _copy_extensions(extensions: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return dict(extensions) if extensions else None


def _copy_security(security: Optional[List[Dict[str, List[str]]]]) -> Optional[List[Dict[str, List[str]]]]:
    if security is None:
        return None
    return [{name: list(scopes or []) for name, scopes in requirement.items()} for requirement in security]


class SwaggerConverter:
    """Converts one Swagger 2 tree. Instances are single-use."""

    def __init__(self, swagger: sw.Swagger):
        self._swagger = swagger
        self.messages: List[str] = []

    # ---- entry point -------------------------------------------------------

    def convert(self) -> Optional[oas.OpenAPI]:
        """Build the OpenAPI 3 tree, or return None and fill ``messages``."""
        swagger = self._swagger
        if swagger.paths is None:
            self.messages.append("attribute paths is missing")
            return None

        openapi = oas.OpenAPI(
            openapi=CONVERTED_OPENAPI_VERSION,
            info=self._info(swagger.info),
            external_docs=self._external_docs(swagger.external_docs),
            servers=self._servers(),
            security=_copy_security(swagger.security),
            tags=[self._tag(tag) for tag in swagger.tags] if swagger.tags else None,
            components=self._components(),
            paths={url: self._path_item(path) for url, path in swagger.paths.items()},
            extensions=_copy_extensions(swagger.vendor_extensions),
        )
        logger.debug(f"Converted Swagger 2 document with {len(openapi.paths)} paths")
        return openapi

    # ---- document level -----------------------------------------------------

    def _info(self, info: Optional[sw.Info]) -> Optional[oas.Info]:
        if info is None:
            return None
        contact = info.contact
        license_ = info.license
        return oas.Info(
            title=info.title,
            description=info.description,
            terms_of_service=info.terms_of_service,
            contact=oas.Contact(
                name=contact.name,
                url=contact.url,
                email=contact.email,
                extensions=_copy_extensions(contact.vendor_extensions),
            ) if contact is not None else None,
            license=oas.License(
                name=license_.name,
                url=license_.url,
                extensions=_copy_extensions(license_.vendor_extensions),
            ) if license_ is not None else None,
            version=info.version,
            extensions=_copy_extensions(info.vendor_extensions),
        )

    def _external_docs(self, docs: Optional[sw.ExternalDocs]) -> Optional[oas.ExternalDocumentation]:
        if docs is None:
            return None
        return oas.ExternalDocumentation(
            description=docs.description,
            url=docs.url,
            extensions=_copy_extensions(docs.vendor_extensions),
        )

    def _tag(self, tag: sw.Tag) -> oas.Tag:
        return oas.Tag(
            name=tag.name,
            description=tag.description,
            external_docs=self._external_docs(tag.external_docs),
            extensions=_copy_extensions(tag.vendor_extensions),
        )

    def _servers(self) -> List[oas.Server]:
        swagger = self._swagger
        base_path = swagger.base_path or ""
        if not swagger.host:
            return [oas.Server(url=base_path or "/")]
        if not swagger.schemes:
            return [oas.Server(url=f"//{swagger.host}{base_path}")]
        return [oas.Server(url=f"{scheme}://{swagger.host}{base_path}") for scheme in swagger.schemes]

    def _components(self) -> Optional[oas.Components]:
        swagger = self._swagger
        components = oas.Components()

        if swagger.definitions:
            components.schemas = {name: self._schema(model) for name, model in swagger.definitions.items()}

        parameters: Dict[str, oas.Parameter] = {}
        request_bodies: Dict[str, oas.RequestBody] = {}
        for name, parameter in (swagger.parameters or {}).items():
            if parameter.in_ == "body":
                request_bodies[name] = self._request_body(parameter, self._consumes(None))
            elif parameter.in_ == "formData":
                # Inlined into the form request body of each operation using it
                continue
            else:
                parameters[name] = self._parameter(parameter)
        components.parameters = parameters or None
        components.request_bodies = request_bodies or None

        if swagger.responses:
            produces = self._produces(None)
            components.responses = {
                name: self._response(response, produces) for name, response in swagger.responses.items()
            }

        if swagger.security_definitions:
            components.security_schemes = {
                name: self._security_scheme(name, definition)
                for name, definition in swagger.security_definitions.items()
            }

        if not any((components.schemas, components.parameters, components.request_bodies,
                    components.responses, components.security_schemes)):
            return None
        return components

    # ---- references ---------------------------------------------------------

    def _ref(self, ref: str) -> str:
        for legacy, current in _REF_NAMESPACES:
            if ref.startswith(legacy):
                return current + ref[len(legacy):]
        if ref.startswith(_PARAMETERS_REF):
            target = self._global_parameter(ref)
            namespace = "requestBodies" if target is not None and target.in_ == "body" else "parameters"
            return f"#/components/{namespace}/{ref[len(_PARAMETERS_REF):]}"
        return ref

    def _global_parameter(self, ref: str) -> Optional[sw.Parameter]:
        if not ref.startswith(_PARAMETERS_REF):
            return None
        return (self._swagger.parameters or {}).get(ref[len(_PARAMETERS_REF):])

    def _effective_parameter(self, parameter: sw.Parameter) -> sw.Parameter:
        """The parameter itself, or the global parameter it references."""
        if parameter.ref:
            target = self._global_parameter(parameter.ref)
            if target is None:
                self.messages.append(f"Unresolvable parameter reference '{parameter.ref}'")
                return parameter
            return target
        return parameter

    # ---- schemas ------------------------------------------------------------

    def _schema(self, model: Optional[sw.Model]) -> Optional[oas.Schema]:
        if model is None:
            return None
        if model.ref:
            return oas.Schema(ref=self._ref(model.ref))

        extensions = dict(model.vendor_extensions or {})
        nullable = extensions.pop(NULLABLE_EXTENSION, None)

        additional = model.additional_properties
        if isinstance(additional, sw.Model):
            additional = self._schema(additional)

        schema_type, schema_format = model.type, model.format
        if schema_type == "file":
            schema_type, schema_format = "string", "binary"

        return oas.Schema(
            title=model.title,
            type=schema_type,
            format=schema_format,
            description=model.description,
            default=model.default,
            enum=list(model.enum) if model.enum is not None else None,
            multiple_of=model.multiple_of,
            maximum=model.maximum,
            exclusive_maximum=model.exclusive_maximum,
            minimum=model.minimum,
            exclusive_minimum=model.exclusive_minimum,
            max_length=model.max_length,
            min_length=model.min_length,
            pattern=model.pattern,
            max_items=model.max_items,
            min_items=model.min_items,
            unique_items=model.unique_items,
            max_properties=model.max_properties,
            min_properties=model.min_properties,
            required=list(model.required) if model.required else None,
            items=self._schema(model.items),
            all_of=[self._schema(m) for m in model.all_of] if model.all_of else None,
            properties={name: self._schema(m) for name, m in model.properties.items()}
            if model.properties is not None else None,
            additional_properties=additional,
            nullable=nullable if isinstance(nullable, bool) else None,
            discriminator=oas.Discriminator(property_name=model.discriminator) if model.discriminator else None,
            read_only=model.read_only,
            xml=self._xml(model.xml),
            external_docs=self._external_docs(model.external_docs),
            example=model.example,
            extensions=extensions or None,
        )

    def _xml(self, xml: Optional[sw.Xml]) -> Optional[oas.XML]:
        if xml is None:
            return None
        return oas.XML(
            name=xml.name,
            namespace=xml.namespace,
            prefix=xml.prefix,
            attribute=xml.attribute,
            wrapped=xml.wrapped,
            extensions=_copy_extensions(xml.vendor_extensions),
        )

    def _parameter_schema(self, parameter: sw.Parameter) -> oas.Schema:
        """Schema of a non-body parameter, which describes its type inline."""
        schema_type, schema_format = parameter.type, parameter.format
        if schema_type == "file":
            schema_type, schema_format = "string", "binary"
        return oas.Schema(
            type=schema_type,
            format=schema_format,
            default=parameter.default,
            enum=list(parameter.enum) if parameter.enum is not None else None,
            multiple_of=parameter.multiple_of,
            maximum=parameter.maximum,
            exclusive_maximum=parameter.exclusive_maximum,
            minimum=parameter.minimum,
            exclusive_minimum=parameter.exclusive_minimum,
            max_length=parameter.max_length,
            min_length=parameter.min_length,
            pattern=parameter.pattern,
            max_items=parameter.max_items,
            min_items=parameter.min_items,
            unique_items=parameter.unique_items,
            items=self._schema(parameter.items),
        )

    # ---- parameters and bodies ---------------------------------------------

    def _consumes(self, operation: Optional[sw.Operation]) -> List[str]:
        return consumed_media_types(self._swagger, operation)

    def _produces(self, operation: Optional[sw.Operation]) -> List[str]:
        return produced_media_types(self._swagger, operation)

    def _style(self, parameter: sw.Parameter) -> Tuple[Optional[str], Optional[bool]]:
        if parameter.type != "array" or parameter.collection_format is None:
            return None, None
        if parameter.in_ in ("path", "header") and parameter.collection_format == "csv":
            return "simple", False
        style = COLLECTION_FORMATS.get(parameter.collection_format)
        if style is None:
            self.messages.append(
                f"Unsupported collectionFormat '{parameter.collection_format}' of parameter '{parameter.name}'"
            )
            return None, None
        return style

    def _parameter(self, parameter: sw.Parameter) -> oas.Parameter:
        if parameter.ref:
            return oas.Parameter(ref=self._ref(parameter.ref))
        style, explode = self._style(parameter)
        return oas.Parameter(
            name=parameter.name,
            in_=parameter.in_,
            description=parameter.description,
            required=parameter.required,
            allow_empty_value=parameter.allow_empty_value,
            style=style,
            explode=explode,
            schema=self._parameter_schema(parameter),
            extensions=_copy_extensions(parameter.vendor_extensions),
        )

    def _request_body(self, parameter: sw.Parameter, consumes: List[str]) -> oas.RequestBody:
        if parameter.ref:
            return oas.RequestBody(ref=self._ref(parameter.ref))
        schema = self._schema(parameter.schema)
        return oas.RequestBody(
            description=parameter.description,
            content={media_type: oas.MediaType(schema=schema) for media_type in consumes},
            required=parameter.required,
            extensions=_copy_extensions(parameter.vendor_extensions),
        )

    def _form_request_body(self, fields: List[sw.Parameter], consumes: List[str]) -> oas.RequestBody:
        media_types = form_media_types(fields, consumes)
        required = [f.name for f in fields if f.required]
        schema = oas.Schema(
            type="object",
            properties={f.name: self._parameter_schema(f) for f in fields},
            required=required or None,
        )
        return oas.RequestBody(
            content={media_type: oas.MediaType(schema=schema) for media_type in media_types},
            required=bool(required) or None,
        )

    # ---- responses ----------------------------------------------------------

    def _header(self, header: sw.Model) -> oas.Header:
        return oas.Header(description=header.description, schema=self._schema(header))

    def _response(self, response: sw.Response, produces: List[str]) -> oas.ApiResponse:
        if response.ref:
            return oas.ApiResponse(ref=self._ref(response.ref))

        content = None
        if response.schema is not None:
            schema = self._schema(response.schema)
            examples = response.examples or {}
            content = {
                media_type: oas.MediaType(schema=schema, example=examples.get(media_type))
                for media_type in produces
            }

        return oas.ApiResponse(
            description=response.description,
            headers={name: self._header(h) for name, h in response.headers.items()} if response.headers else None,
            content=content,
            extensions=_copy_extensions(response.vendor_extensions),
        )

    # ---- paths --------------------------------------------------------------

    def _path_item(self, path: sw.Path) -> oas.PathItem:
        shared = path.parameters or []
        item = oas.PathItem(
            ref=self._ref(path.ref) if path.ref else None,
            extensions=_copy_extensions(path.vendor_extensions),
        )

        plain = [p for p in shared if self._effective_parameter(p).in_ not in ("body", "formData")]
        item.parameters = [self._parameter(p) for p in plain] or None

        for method, operation in path.operation_map().items():
            setattr(item, method, self._operation(operation, shared))
        return item

    def _operation(self, operation: sw.Operation, shared: List[sw.Parameter]) -> oas.Operation:
        consumes = self._consumes(operation)
        own = operation.parameters or []

        parameters: List[oas.Parameter] = []
        body: Optional[sw.Parameter] = None
        form: List[sw.Parameter] = []

        # Path-level body/form parameters apply unless the operation declares its own
        own_body = any(self._effective_parameter(p).in_ in ("body", "formData") for p in own)
        inherited = [] if own_body else [
            p for p in shared if self._effective_parameter(p).in_ in ("body", "formData")
        ]

        for parameter in inherited + own:
            target = self._effective_parameter(parameter)
            if target.in_ == "body":
                body = parameter
            elif target.in_ == "formData":
                form.append(target)
            else:
                parameters.append(self._parameter(parameter))

        request_body = None
        if body is not None:
            request_body = self._request_body(body, consumes)
        elif form:
            request_body = self._form_request_body(form, consumes)

        produces = self._produces(operation)
        return oas.Operation(
            tags=list(operation.tags) if operation.tags is not None else None,
            summary=operation.summary,
            description=operation.description,
            external_docs=self._external_docs(operation.external_docs),
            operation_id=operation.operation_id,
            parameters=parameters or None,
            request_body=request_body,
            responses={
                code: self._response(response, produces)
                for code, response in (operation.responses or {}).items()
            },
            deprecated=operation.deprecated,
            security=_copy_security(operation.security),
            extensions=_copy_extensions(operation.vendor_extensions),
        )

    # ---- security -----------------------------------------------------------

    def _security_scheme(self, name: str, definition: sw.SecurityDefinition) -> oas.SecurityScheme:
        extensions = _copy_extensions(definition.vendor_extensions)

        if definition.type == "basic":
            return oas.SecurityScheme(
                type="http", scheme="basic", description=definition.description, extensions=extensions
            )

        if definition.type == "apiKey":
            return oas.SecurityScheme(
                type="apiKey",
                name=definition.name,
                in_=definition.in_,
                description=definition.description,
                extensions=extensions,
            )

        if definition.type == "oauth2":
            flows = oas.OAuthFlows()
            flow_name = OAUTH_FLOWS.get(definition.flow)
            if flow_name is not None:
                setattr(flows, flow_name, oas.OAuthFlow(
                    authorization_url=definition.authorization_url,
                    token_url=definition.token_url,
                    scopes=dict(definition.scopes or {}),
                ))
            return oas.SecurityScheme(
                type="oauth2", flows=flows, description=definition.description, extensions=extensions
            )

        raise ConversionError(f"Security definition '{name}' has unsupported type '{definition.type}'")
