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

"""
Tests for the Swagger 2 → OpenAPI 3 conversion stage.
"""

import pytest

from openapi_context.conversion import convert_swagger_to_openapi, pre_convert_checks
from openapi_context.conversion.swagger_converter import SwaggerConverter
from openapi_context.models.swagger import Swagger
from openapi_context.parsing.document_parser import Dialect, parse
from openapi_context.rule.content_parse_result import ParsedWithErrors, Success
from openapi_context.rule.violation import Violation

HEADER = "swagger: '2.0'\ninfo: {title: t, version: v}\n"


def _convert(text):
    return parse(text, Dialect.SWAGGER).flat_map(convert_swagger_to_openapi)


def _converted(text):
    outcome = _convert(text)
    assert isinstance(outcome, Success), outcome
    return outcome.result.tree


# =============================================================================
# PRE-CONVERSION FIX-UPS
# =============================================================================

class TestPreConvertChecks:
    """Patching a Swagger 2 tree before conversion."""

    def test_missing_info_is_created(self):
        tree = Swagger.from_dict({"swagger": "2.0", "paths": {}})
        assert pre_convert_checks(tree) == []
        assert tree.info is not None
        assert tree.info.title is None

    def test_oauth2_defaults(self):
        tree = Swagger.from_dict({
            "swagger": "2.0",
            "paths": {},
            "securityDefinitions": {"oauth": {"type": "oauth2"}},
        })
        assert pre_convert_checks(tree) == []
        definition = tree.security_definitions["oauth"]
        assert definition.flow == ""
        assert definition.scopes == {}

    def test_unknown_security_type(self):
        tree = Swagger.from_dict({
            "swagger": "2.0",
            "paths": {},
            "securityDefinitions": {"weird": {"type": "magic"}},
        })
        assert pre_convert_checks(tree) == [
            Violation("Security definition 'weird' has unknown type 'magic'", "/securityDefinitions/weird/type")
        ]


# =============================================================================
# DOCUMENT
# =============================================================================

class TestDocument:
    """Document-level conversion."""

    def test_version_and_servers(self, swagger_doc):
        tree = _converted(swagger_doc)
        assert tree.openapi == "3.0.1"
        assert [server.url for server in tree.servers] == ["https://api.example.com/v1"]
        assert tree.info.title == "Pets"

    @pytest.mark.parametrize("location, url", [
        ("", "/"),
        ("basePath: /v2\n", "/v2"),
        ("host: h.example.com\n", "//h.example.com"),
        ("host: h.example.com\nschemes: [http, https]\n", "http://h.example.com"),
    ])
    def test_server_urls(self, location, url):
        tree = _converted(HEADER + location + "paths: {}\n")
        assert tree.servers[0].url == url

    def test_definitions_become_schemas(self, swagger_doc):
        tree = _converted(swagger_doc)
        pet = tree.components.schemas["Pet"]
        assert pet.type == "object"
        assert pet.nullable is True
        assert pet.extensions is None
        assert pet.properties["name"].type == "string"

    def test_extensions_are_copied(self, swagger_doc):
        tree = _converted(swagger_doc)
        assert tree.paths["/pets"].post.extensions == {"x-audited": True}
        assert tree.paths["/pets"].extensions == {"x-lint-ignore": "R200"}

    @pytest.mark.parametrize("ref, expected", [
        ("#/definitions/Shared", "#/components/schemas/Shared"),
        ("#/responses/Shared", "#/components/responses/Shared"),
        ("common.yaml#/paths/~1a", "common.yaml#/paths/~1a"),
    ])
    def test_path_item_reference(self, ref, expected):
        tree = _converted(HEADER + f"paths:\n  /a:\n    $ref: '{ref}'\n")
        assert tree.paths["/a"].ref == expected

    def test_missing_paths(self):
        outcome = _convert(HEADER)
        assert outcome == ParsedWithErrors([Violation("attribute paths is missing", "")])

    def test_converter_failure(self, swagger_doc, monkeypatch):
        def explode(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(SwaggerConverter, "convert", explode)
        assert _convert(swagger_doc) == ParsedWithErrors([Violation("Unable to parse specification", "")])


# =============================================================================
# PARAMETERS AND BODIES
# =============================================================================

class TestParameters:
    """Parameters, request bodies and responses."""

    def test_query_parameter(self, swagger_doc):
        tree = _converted(swagger_doc)
        [limit] = tree.paths["/pets"].get.parameters
        assert limit.name == "limit"
        assert limit.in_ == "query"
        assert limit.schema.type == "integer"

    def test_body_becomes_request_body(self, swagger_doc):
        tree = _converted(swagger_doc)
        body = tree.paths["/pets"].post.request_body
        assert body.required is True
        assert list(body.content) == ["application/json"]
        assert body.content["application/json"].schema is tree.components.schemas["Pet"]
        assert tree.paths["/pets"].post.parameters is None

    def test_response_content_follows_produces(self):
        tree = _converted(
            HEADER + "produces: [application/xml, application/json]\npaths:\n  /a:\n    get:\n"
            "      responses:\n        '200': {description: ok, schema: {type: string}}\n"
        )
        content = tree.paths["/a"].get.responses["200"].content
        assert list(content) == ["application/xml", "application/json"]

    @pytest.mark.parametrize("field_type, media_type", [
        ("string", "application/x-www-form-urlencoded"),
        ("file", "multipart/form-data"),
    ])
    def test_form_data(self, field_type, media_type):
        tree = _converted(
            HEADER + "paths:\n  /upload:\n    post:\n      parameters:\n"
            f"        - {{name: upload, in: formData, type: {field_type}, required: true}}\n"
            "      responses:\n        '204': {description: done}\n"
        )
        body = tree.paths["/upload"].post.request_body
        assert list(body.content) == [media_type]
        schema = body.content[media_type].schema
        assert schema.type == "object"
        assert schema.required == ["upload"]
        assert "upload" in schema.properties

    def test_global_body_parameter(self):
        tree = _converted(
            HEADER + "parameters:\n  PetBody: {name: pet, in: body, schema: {type: object}}\n"
            "paths:\n  /pets:\n    post:\n      parameters:\n        - $ref: '#/parameters/PetBody'\n"
            "      responses:\n        '201': {description: created}\n"
        )
        body = tree.paths["/pets"].post.request_body
        assert body is tree.components.request_bodies["PetBody"]
        assert tree.components.parameters is None

    @pytest.mark.parametrize("location, collection_format, style, explode", [
        ("query", "csv", "form", False),
        ("query", "multi", "form", True),
        ("query", "pipes", "pipeDelimited", False),
        ("header", "csv", "simple", False),
    ])
    def test_collection_format(self, location, collection_format, style, explode):
        tree = _converted(
            HEADER + "paths:\n  /a:\n    get:\n      parameters:\n"
            f"        - {{name: ids, in: {location}, type: array, items: {{type: string}}, "
            f"collectionFormat: {collection_format}}}\n"
            "      responses:\n        '200': {description: ok}\n"
        )
        [parameter] = tree.paths["/a"].get.parameters
        assert (parameter.style, parameter.explode) == (style, explode)
        assert parameter.schema.items.type == "string"


# =============================================================================
# SECURITY
# =============================================================================

class TestSecuritySchemes:
    """securityDefinitions → components.securitySchemes."""

    def test_basic(self):
        tree = _converted(HEADER + "securityDefinitions:\n  b: {type: basic}\npaths: {}\n")
        scheme = tree.components.security_schemes["b"]
        assert (scheme.type, scheme.scheme) == ("http", "basic")

    def test_api_key(self, swagger_doc):
        scheme = _converted(swagger_doc).components.security_schemes["key"]
        assert (scheme.type, scheme.name, scheme.in_) == ("apiKey", "X-Api-Key", "header")

    def test_oauth2_flow(self):
        tree = _converted(
            HEADER + "securityDefinitions:\n  o:\n    type: oauth2\n    flow: implicit\n"
            "    authorizationUrl: https://a.example.com\n    scopes: {read: Read access}\n"
            "paths: {}\n"
        )
        flows = tree.components.security_schemes["o"].flows
        assert flows.implicit.authorization_url == "https://a.example.com"
        assert flows.implicit.scopes == {"read": "Read access"}

    def test_oauth2_without_flow(self, swagger_doc):
        flows = _converted(swagger_doc).components.security_schemes["oauth"].flows
        assert flows.implicit is None
        assert flows.password is None

    def test_unknown_type_is_rejected(self):
        outcome = _convert(HEADER + "securityDefinitions:\n  w: {type: magic}\npaths: {}\n")
        assert outcome == ParsedWithErrors([
            Violation("Security definition 'w' has unknown type 'magic'", "/securityDefinitions/w/type")
        ])
