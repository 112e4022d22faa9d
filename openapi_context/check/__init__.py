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

"""Diagnostic check: can a context be built for each document, and where does it fail."""

import logging
from pathlib import Path
from typing import List

from ..exceptions import DocumentParseError
from ..file_io.source_location import lookup_source, with_file
from ..parsing.yaml_parser import yaml_parser
from ..rule.content_parse_result import ParsedWithErrors, Success
from ..rule.context_factory import create_context
from .report import CheckResult

__all__ = ['check_file', 'check_files', 'CheckResult']

logger = logging.getLogger(__name__)


def check_file(file_path: Path) -> CheckResult:
    """Build a context for one document and report what went wrong."""
    result = CheckResult(file_path)

    try:
        content = yaml_parser.read_file(file_path)
    except DocumentParseError as e:
        result.add_error(str(e))
        return result

    outcome = create_context(content)
    if isinstance(outcome, Success):
        context = outcome.result
        result.dialect = "openapi" if context.is_openapi3() else "swagger"
        for message in context.messages:
            result.add_warning(message, with_file(context.message_location(message), file_path))
    elif isinstance(outcome, ParsedWithErrors):
        source_map = yaml_parser.build_source_map(content)
        for violation in outcome.violations:
            location = lookup_source(source_map, violation.pointer)
            result.add_error(violation.description, with_file(location, file_path))

    return result


def check_files(file_paths: List[Path]) -> List[CheckResult]:
    """Check a list of documents.

    Returns:
        List of CheckResult objects, one per file
    """
    results = []

    for file_path in file_paths:
        try:
            results.append(check_file(file_path))
        except Exception as e:
            logger.debug(f"Check of {file_path} failed", exc_info=True)
            result = CheckResult(file_path)
            result.add_error(f"Unexpected error during check: {str(e)}")
            results.append(result)

    return results
