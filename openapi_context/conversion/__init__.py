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

"""Swagger 2 → OpenAPI 3 conversion stage."""

import logging

from ..parsing.document_parser import Dialect, RawParseResult, resolve
from ..rule.content_parse_result import ContentParseResult, ParsedWithErrors
from ..rule.violation import error_to_violation, unable_to_parse
from .checks import pre_convert_checks
from .swagger_converter import SwaggerConverter

__all__ = ['convert_swagger_to_openapi', 'pre_convert_checks', 'SwaggerConverter']

logger = logging.getLogger(__name__)


def convert_swagger_to_openapi(result: RawParseResult) -> ContentParseResult[RawParseResult]:
    """Convert a parsed Swagger 2 document and resolve the converted tree.

    Args:
        result: Successful Swagger 2 parse result; its tree is patched in place
            by :func:`pre_convert_checks`

    Returns:
        Success with an OpenAPI 3 result, or ParsedWithErrors
    """
    violations = pre_convert_checks(result.tree)
    if violations:
        return ParsedWithErrors(violations)

    converter = SwaggerConverter(result.tree)
    try:
        converted = converter.convert()
    except Exception:
        logger.warning("Unable to convert Swagger 2 document", exc_info=True)
        return ParsedWithErrors([unable_to_parse()])

    for message in converter.messages:
        logger.debug(f"conversion: {message}")

    if converted is None:
        if converter.messages:
            return ParsedWithErrors([error_to_violation(message) for message in converter.messages])
        return ParsedWithErrors([unable_to_parse()])

    return resolve(RawParseResult(Dialect.OPENAPI, converted, list(converter.messages)))
