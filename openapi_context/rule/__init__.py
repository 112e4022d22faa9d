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

"""Contexts and violations for rule evaluation."""

from .violation import Violation, UNABLE_TO_PARSE
from .content_parse_result import (
    ContentParseResult,
    NotApplicable,
    ParsedWithErrors,
    ParseOutcome,
    Success,
)
from .context import DefaultContext
from .context_factory import create_context, create_openapi_context, create_swagger_context

__all__ = [
    "Violation",
    "UNABLE_TO_PARSE",
    "ContentParseResult",
    "NotApplicable",
    "ParsedWithErrors",
    "ParseOutcome",
    "Success",
    "DefaultContext",
    "create_context",
    "create_openapi_context",
    "create_swagger_context",
]
