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
Tests for the rule context: creation, violation locations and suppression.
"""

import pytest

from openapi_context import (
    DefaultContext,
    NotApplicable,
    ParsedWithErrors,
    Success,
    Violation,
    create_context,
    create_openapi_context,
    create_swagger_context,
)
from openapi_context.models.openapi import HttpMethod
from openapi_context.tree import unwrap


def _context(outcome):
    assert isinstance(outcome, Success), outcome
    return outcome.result


@pytest.fixture
def openapi_context(openapi_doc):
    return _context(create_context(openapi_doc))


@pytest.fixture
def swagger_context(swagger_doc):
    return _context(create_context(swagger_doc))


# =============================================================================
# CREATION
# =============================================================================

class TestCreation:
    """Choosing the dialect of a document."""

    def test_openapi_document(self, openapi_context, openapi_doc):
        assert openapi_context.is_openapi3()
        assert openapi_context.swagger is None
        assert openapi_context.source == openapi_doc
        assert openapi_context.messages == []

    def test_swagger_document(self, swagger_context):
        assert not swagger_context.is_openapi3()
        assert swagger_context.swagger is not None
        assert swagger_context.api.openapi == "3.0.1"

    def test_neither_dialect(self):
        assert create_context("just: text") == ParsedWithErrors([Violation("Unable to parse specification", "")])

    def test_dialect_specific_factories(self, openapi_doc, swagger_doc):
        assert isinstance(create_openapi_context(swagger_doc), NotApplicable)
        assert isinstance(create_swagger_context(openapi_doc), NotApplicable)

    def test_rejected_document(self):
        outcome = create_context("openapi: 4.0.0\ninfo: {title: t, version: v}\npaths: {}\n")
        assert outcome == ParsedWithErrors([Violation("attribute openapi is not of type `3.x`", "")])

    def test_unknown_security_type(self, swagger_doc):
        text = swagger_doc.replace("type: apiKey", "type: magic")
        outcome = create_context(text)
        assert outcome == ParsedWithErrors([
            Violation("Security definition 'key' has unknown type 'magic'", "/securityDefinitions/key/type")
        ])

    def test_swagger_tree_is_patched(self, swagger_context):
        oauth = swagger_context.swagger.security_definitions["oauth"]
        assert oauth.flow == ""
        assert oauth.scopes == {}

    def test_parser_messages_are_kept(self):
        context = _context(create_context("openapi: 3.0.0\ninfo: {version: v}\npaths: {}\n"))
        assert context.messages == ["attribute info.title is missing"]


# =============================================================================
# VIOLATION LOCATIONS
# =============================================================================

class TestViolationLocation:
    """Where a violation points."""

    def test_recorded_pointer(self, openapi_context):
        openapi_context.api.paths["/pets"].get.operation_id
        violation = openapi_context.violation("bad id")
        assert violation == Violation("bad id", "/paths/~1pets/get/operationId")

    def test_explicit_pointer_wins(self, openapi_context):
        openapi_context.api.info.title
        assert openapi_context.violation("x", pointer="/servers").pointer == "/servers"

    def test_value_pointer(self, openapi_context):
        pet = openapi_context.api.components.schemas["Pet"]
        openapi_context.api.info
        assert openapi_context.violation("x", value=pet).pointer == "/components/schemas/Pet"

    def test_shared_node_points_at_definition(self, openapi_context):
        schema = openapi_context.api.paths["/pets"].get.responses["200"].content["application/json"].schema
        assert openapi_context.violation("x", value=schema.items).pointer == "/components/schemas/Pet"

    def test_unknown_value_falls_back_to_recorded(self, openapi_context):
        openapi_context.api.info
        assert openapi_context.violation("x", value=object()).pointer == "/info"

    def test_violations_list(self, openapi_context):
        assert openapi_context.violations("x", pointer="/info") == [Violation("x", "/info")]

    def test_legacy_node_renamed(self, swagger_context):
        pet = swagger_context.swagger.definitions["Pet"]
        assert swagger_context.violation("x", value=pet).pointer == "/components/schemas/Pet"

    def test_legacy_node_without_rename(self, swagger_context):
        operation = swagger_context.swagger.paths["/pets"].post
        assert swagger_context.violation("x", value=operation).pointer == "/paths/~1pets/post"

    def test_converted_node(self, swagger_context):
        operation = swagger_context.api.paths["/pets"].get
        assert swagger_context.violation("x", value=operation).pointer == "/paths/~1pets/get"

    def test_extensions_are_not_recorded(self, openapi_context):
        get = openapi_context.api.paths["/pets"].get
        assert get.extensions == {"x-lint-ignore": ["R101", "R102"]}
        assert openapi_context.recorded_pointer == "/paths/~1pets/get"
        assert all("x-" not in p for p in openapi_context.openapi_ast.pointers())


LEGACY_DOC = """\
swagger: "2.0"
info: {title: t, version: v}
consumes: [application/json]
produces: [application/json]
parameters:
  PetBody:
    name: pet
    in: body
    schema: {type: object}
  Limit:
    name: limit
    in: query
    type: array
    items: {type: integer}
responses:
  NotFound:
    description: missing
    schema:
      type: object
      properties:
        code: {type: integer}
    headers:
      X-Rate:
        type: array
        items: {type: integer}
securityDefinitions:
  oauth:
    type: oauth2
    flow: application
    tokenUrl: https://token.example.com
    scopes: {read: Read access}
paths:
  /pets:
    post:
      parameters:
        - name: pet
          in: body
          schema:
            type: object
            properties:
              name: {type: string}
        - {name: trace, in: header, type: string}
      responses:
        "200":
          description: ok
          schema:
            type: array
            items: {type: string}
  /upload:
    post:
      consumes: [multipart/form-data]
      parameters:
        - {name: file, in: formData, type: array, items: {type: string}}
      responses:
        "204": {description: done}
"""


class TestLegacyNodeTranslation:
    """Swagger 2 nodes point at the node the converter built from them."""

    @pytest.fixture
    def legacy_context(self):
        return _context(create_context(LEGACY_DOC))

    @pytest.mark.parametrize("select, expected", [
        (lambda s: s.parameters["PetBody"], "/components/requestBodies/PetBody"),
        (lambda s: s.parameters["PetBody"].schema,
         "/components/requestBodies/PetBody/content/application~1json/schema"),
        (lambda s: s.parameters["Limit"], "/components/parameters/Limit"),
        (lambda s: s.parameters["Limit"].items, "/components/parameters/Limit/schema/items"),
        (lambda s: s.responses["NotFound"], "/components/responses/NotFound"),
        (lambda s: s.responses["NotFound"].schema, "/components/responses/NotFound/content/application~1json/schema"),
        (lambda s: s.responses["NotFound"].schema.properties["code"],
         "/components/responses/NotFound/content/application~1json/schema/properties/code"),
        (lambda s: s.responses["NotFound"].headers["X-Rate"], "/components/responses/NotFound/headers/X-Rate"),
        (lambda s: s.responses["NotFound"].headers["X-Rate"].items,
         "/components/responses/NotFound/headers/X-Rate/schema/items"),
        (lambda s: s.security_definitions["oauth"], "/components/securitySchemes/oauth"),
        (lambda s: s.security_definitions["oauth"].scopes,
         "/components/securitySchemes/oauth/flows/clientCredentials/scopes"),
        (lambda s: s.paths["/pets"].post.parameters[0], "/paths/~1pets/post/requestBody"),
        (lambda s: s.paths["/pets"].post.parameters[0].schema.properties["name"],
         "/paths/~1pets/post/requestBody/content/application~1json/schema/properties/name"),
        (lambda s: s.paths["/pets"].post.parameters[1], "/paths/~1pets/post/parameters/0"),
        (lambda s: s.paths["/pets"].post.responses["200"].schema.items,
         "/paths/~1pets/post/responses/200/content/application~1json/schema/items"),
        (lambda s: s.paths["/upload"].post.parameters[0].items,
         "/paths/~1upload/post/requestBody/content/multipart~1form-data/schema/properties/file/items"),
    ])
    def test_translated_pointer(self, legacy_context, select, expected):
        node = select(legacy_context.swagger)
        pointer = legacy_context.pointer_for_value(node)
        assert pointer == expected
        assert legacy_context.openapi_ast.get_value(pointer) is not None

    def test_referenced_definition(self, swagger_context):
        schema = swagger_context.swagger.paths["/pets"].post.parameters[0].schema
        assert swagger_context.pointer_for_value(schema) == "/components/schemas/Pet"

    def test_node_without_counterpart_keeps_legacy_pointer(self, legacy_context):
        consumes = legacy_context.swagger.paths["/upload"].post.consumes
        assert legacy_context.pointer_for_value(consumes) == "/paths/~1upload/post/consumes"


# =============================================================================
# ITERATION HELPERS
# =============================================================================

class TestValidateHelpers:
    """validate_paths and validate_operations."""

    def test_validate_paths(self, openapi_context):
        violations = openapi_context.validate_paths(
            lambda path, item: [openapi_context.violation(f"path {path}")]
        )
        assert violations == [Violation("path /pets", "/paths/~1pets")]

    def test_path_filter(self, openapi_context):
        violations = openapi_context.validate_paths(
            lambda path, item: [openapi_context.violation("x")],
            path_filter=lambda path, item: path != "/pets",
        )
        assert violations == []

    def test_none_results_are_dropped(self, openapi_context):
        assert openapi_context.validate_paths(lambda path, item: None) == []
        assert openapi_context.validate_paths(lambda path, item: [None]) == []

    def test_validate_operations(self, openapi_context):
        def missing_operation_id(method, operation):
            if operation.operation_id is None:
                return [openapi_context.violation(f"{method.value} has no operationId")]
            return []

        violations = openapi_context.validate_operations(missing_operation_id)
        assert violations == [Violation("post has no operationId", "/paths/~1pets/post/operationId")]

    def test_operation_filter(self, openapi_context):
        seen = []
        openapi_context.validate_operations(
            lambda method, operation: seen.append(method),
            operation_filter=lambda method, operation: method is HttpMethod.GET,
        )
        assert seen == [HttpMethod.GET]

    def test_swagger_context_iterates_converted_tree(self, swagger_context):
        methods = []
        swagger_context.validate_operations(lambda method, operation: methods.append(method.value))
        assert methods == ["get", "post"]


# =============================================================================
# SUPPRESSION AND SOURCE LOCATIONS
# =============================================================================

class TestSuppression:
    """Rule suppression through the ignore extension."""

    def test_openapi_document(self, openapi_context):
        assert openapi_context.is_ignored("/paths/~1pets/get", "R101")
        assert openapi_context.is_ignored("/paths/~1pets/get/responses/200", "R102")
        assert not openapi_context.is_ignored("/paths/~1pets/post", "R101")

    def test_swagger_document(self, swagger_context):
        assert swagger_context.is_ignored("/paths/~1pets/get", "R200")
        assert not swagger_context.is_ignored("/definitions/Pet", "R200")


class TestSourceLocation:
    """Mapping pointers back to lines of the submitted text."""

    def test_openapi_location(self, openapi_context, openapi_doc):
        lines = openapi_doc.splitlines()
        location = openapi_context.location_of("/paths/~1pets/get/operationId")
        assert location.line == lines.index("      operationId: listPets") + 1
        assert location.pointer == "/paths/~1pets/get/operationId"

    def test_nearest_ancestor(self, openapi_context, openapi_doc):
        lines = openapi_doc.splitlines()
        location = openapi_context.location_of("/paths/~1pets/get/summary")
        assert location.line == lines.index("    get:") + 2

    def test_converted_location(self, swagger_context, swagger_doc):
        lines = swagger_doc.splitlines()
        location = swagger_context.location_of("/components/schemas/Pet")
        assert location.line == lines.index("  Pet:") + 2

    def test_unknown_pointer(self, openapi_context):
        assert openapi_context.location_of(None).line is None

    def test_message_locations(self, swagger_context, swagger_doc):
        lines = swagger_doc.splitlines()
        context = DefaultContext(
            swagger_doc,
            unwrap(swagger_context.api),
            swagger_context.swagger,
            messages=["attribute definitions.Pet.title is missing"],
            conversion_messages=["attribute components.schemas.Pet.title is missing"],
        )
        parsed, converted = context.messages
        assert context.message_location(parsed).line == lines.index("  Pet:") + 2
        assert context.message_location(converted).line == lines.index("  Pet:") + 2
        assert context.message_location(converted).pointer == "/definitions/Pet"
