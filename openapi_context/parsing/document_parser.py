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

"""Parsing of API description text into a document tree of one dialect.

``parse`` never raises for bad input. Problems with the text are reported as
parser messages on the :class:`RawParseResult`, phrased the way a
deserializer phrases them (``attribute info.title is missing``), and the result
is classified into a parse outcome:

* no tree, and no messages or only "discriminator is missing" → not this dialect
* no tree otherwise → rejected with violations
* a tree → success, messages are kept for diagnostics
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Type

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from ..config import context_config
from ..exceptions import DocumentParseError
from ..models.node import ModelNode
from ..models.openapi import OpenAPI
from ..models.swagger import Swagger
from ..rule.content_parse_result import ContentParseResult, NotApplicable, ParsedWithErrors, Success
from ..rule.violation import error_to_violation
from ..utils.format_version import check_format_version
from .json_schema_loader import load_schema
from .resolver import ReferenceResolver
from .yaml_parser import yaml_parser

logger = logging.getLogger(__name__)


class Dialect(str, Enum):
    OPENAPI = "openapi"
    SWAGGER = "swagger"

    @property
    def discriminator(self) -> str:
        """Root attribute that declares the dialect version."""
        return self.value

    @property
    def model(self) -> Type[ModelNode]:
        return OpenAPI if self is Dialect.OPENAPI else Swagger


@dataclass
class RawParseResult:
    dialect: Dialect
    tree: Optional[ModelNode] = None
    messages: List[str] = field(default_factory=list)


def missing_attribute_message(path: str) -> str:
    return f"attribute {path} is missing"


def _dotted(path) -> str:
    return ".".join(str(segment) for segment in path)


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _missing_property(error: ValidationError) -> Optional[str]:
    if not isinstance(error.instance, dict):
        return None
    for name in error.validator_value:
        if name not in error.instance and error.message.startswith(repr(name)):
            return name
    return None


def schema_error_message(error: ValidationError) -> str:
    """Phrase a JSON Schema error the way the model deserializer would."""
    path = _dotted(error.absolute_path)

    if error.validator == "required":
        name = _missing_property(error)
        if name is not None:
            return missing_attribute_message(_join(path, name))

    if error.validator == "type":
        expected = error.validator_value
        if isinstance(expected, list):
            expected = "|".join(expected)
        return f"attribute {path or '(root)'} is not of type `{expected}`"

    return f"attribute {path or '(root)'} {error.message}"


def schema_messages(data: Any, schema: dict) -> List[str]:
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    return [schema_error_message(error) for error in errors]


def read_contents(text: str, dialect: Dialect) -> RawParseResult:
    """Deserialize ``text`` as ``dialect``, collecting parser messages."""
    try:
        data = yaml_parser.load_document(text)
    except DocumentParseError as exc:
        return RawParseResult(dialect, messages=[str(exc)])

    discriminator = dialect.discriminator
    if not isinstance(data, dict) or discriminator not in data:
        return RawParseResult(dialect, messages=[missing_attribute_message(discriminator)])

    version_check = check_format_version(data[discriminator], dialect.value)
    if not version_check.compatible:
        logger.debug(version_check.message)
        major = version_check.supported_version.major
        return RawParseResult(
            dialect,
            messages=[f"attribute {discriminator} is not of type `{major}.x`"],
        )
    if version_check.minor_newer:
        logger.warning(version_check.message)

    messages: List[str] = []
    try:
        schema = load_schema(dialect.value, version_check.file_version.short)
        messages = schema_messages(data, schema)
    except FileNotFoundError as exc:
        logger.warning(f"Skipping structural checks: {exc}")

    for message in messages:
        logger.debug(f"{dialect.value}: {message}")

    return RawParseResult(dialect, tree=dialect.model.from_dict(data), messages=messages)


def _is_discriminator_missing(result: RawParseResult) -> bool:
    return missing_attribute_message(result.dialect.discriminator) in result.messages


def classify(result: RawParseResult) -> ContentParseResult[RawParseResult]:
    if result.tree is not None:
        return Success(result)
    if not result.messages or _is_discriminator_missing(result):
        return NotApplicable()
    return ParsedWithErrors([error_to_violation(message) for message in result.messages])


def parse(text: str, dialect: Dialect) -> ContentParseResult[RawParseResult]:
    """Parse ``text`` as a document of ``dialect``."""
    return classify(read_contents(text, dialect))


def resolve(result: RawParseResult) -> ContentParseResult[RawParseResult]:
    """Expand local references of an OpenAPI 3 tree in place.

    References that cannot be resolved are logged and left in place; the
    others are still replaced.
    Swagger 2 trees are never resolved.
    """
    if result.dialect is not Dialect.OPENAPI or not context_config.resolve_fully:
        return Success(result)

    resolver = ReferenceResolver(result.tree)
    resolver.resolve_fully()
    if resolver.skipped:
        logger.warning(
            f"Reference resolution skipped for {len(resolver.skipped)} reference(s): "
            + "; ".join(str(exc) for exc in resolver.skipped)
        )
    return Success(result)
