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

"""Shared documents for the test suite."""

import pytest

from openapi_context.config import context_config
from openapi_context.parsing.json_schema_loader import clear_cache

OPENAPI_DOC = """\
openapi: 3.0.0
info:
  title: Pets
  version: "1.0"
servers:
  - url: https://api.example.com/v1
paths:
  /pets:
    get:
      operationId: listPets
      x-lint-ignore: [R101, R102]
      responses:
        "200":
          description: A list of pets
          content:
            application/json:
              schema:
                type: array
                items:
                  $ref: "#/components/schemas/Pet"
    post:
      responses:
        "201":
          $ref: "#/components/responses/Created"
components:
  schemas:
    Pet:
      type: object
      x-extra:
        nested: true
      properties:
        name:
          type: string
        parent:
          $ref: "#/components/schemas/Pet"
  responses:
    Created:
      description: Created
"""

SWAGGER_DOC = """\
swagger: "2.0"
info:
  title: Pets
  version: "1.0"
host: api.example.com
basePath: /v1
schemes: [https]
consumes: [application/json]
produces: [application/json]
securityDefinitions:
  oauth:
    type: oauth2
    authorizationUrl: https://auth.example.com/authorize
  key:
    type: apiKey
    name: X-Api-Key
    in: header
paths:
  /pets:
    x-lint-ignore: R200
    get:
      operationId: listPets
      parameters:
        - name: limit
          in: query
          type: integer
      responses:
        "200":
          description: A list of pets
          schema:
            type: array
            items:
              $ref: "#/definitions/Pet"
    post:
      x-audited: true
      parameters:
        - name: pet
          in: body
          required: true
          schema:
            $ref: "#/definitions/Pet"
      responses:
        "201":
          description: Created
definitions:
  Pet:
    type: object
    x-nullable: true
    properties:
      name:
        type: string
"""


@pytest.fixture
def openapi_doc():
    return OPENAPI_DOC


@pytest.fixture
def swagger_doc():
    return SWAGGER_DOC


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test with the default configuration, whatever the environment says."""
    monkeypatch.setattr(context_config, "resolve_fully", True)
    monkeypatch.setattr(context_config, "ignore_extension", "x-lint-ignore")
    monkeypatch.setattr(context_config, "log_level", "INFO")
    monkeypatch.setattr(context_config, "print_level", "WARNING")
    yield
    clear_cache()
