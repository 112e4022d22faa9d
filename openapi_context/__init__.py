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

"""Location-aware context over Swagger 2.0 and OpenAPI 3.x documents."""

__version__ = "0.1.0"

# Dialect versions this package reads; documents must match the major version.
SUPPORTED_VERSIONS = {
    "openapi": "3.1.0",
    "swagger": "2.0",
}

from .rule import (  # noqa: E402
    DefaultContext,
    NotApplicable,
    ParsedWithErrors,
    Success,
    Violation,
    create_context,
    create_openapi_context,
    create_swagger_context,
)

__all__ = [
    "__version__",
    "SUPPORTED_VERSIONS",
    "DefaultContext",
    "NotApplicable",
    "ParsedWithErrors",
    "Success",
    "Violation",
    "create_context",
    "create_openapi_context",
    "create_swagger_context",
]
