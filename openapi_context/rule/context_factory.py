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

"""Building a :class:`DefaultContext` from document text."""

import logging

from ..conversion import convert_swagger_to_openapi
from ..parsing.document_parser import Dialect, parse, resolve
from .content_parse_result import ContentParseResult, NotApplicable, ParsedWithErrors
from .context import DefaultContext
from .violation import unable_to_parse

logger = logging.getLogger(__name__)


def create_openapi_context(content: str) -> ContentParseResult[DefaultContext]:
    """Context for an OpenAPI 3 document; NotApplicable for anything else."""
    return (
        parse(content, Dialect.OPENAPI)
        .flat_map(resolve)
        .map(lambda result: DefaultContext(content, result.tree, messages=result.messages))
    )


def create_swagger_context(content: str) -> ContentParseResult[DefaultContext]:
    """Context for a Swagger 2 document, converted to OpenAPI 3; NotApplicable for anything else."""
    return parse(content, Dialect.SWAGGER).flat_map(
        lambda parsed: convert_swagger_to_openapi(parsed).map(
            lambda converted: DefaultContext(
                content,
                converted.tree,
                parsed.tree,
                messages=parsed.messages,
                conversion_messages=converted.messages,
            )
        )
    )


def create_context(content: str) -> ContentParseResult[DefaultContext]:
    """Context for a document of either dialect, trying OpenAPI 3 first."""
    result = create_openapi_context(content)
    if isinstance(result, NotApplicable):
        logger.debug("Not an OpenAPI 3 document, trying Swagger 2")
        result = create_swagger_context(content)
    if isinstance(result, NotApplicable):
        logger.debug("Document is neither OpenAPI 3 nor Swagger 2")
        return ParsedWithErrors([unable_to_parse()])
    return result
