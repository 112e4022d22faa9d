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

"""Custom exceptions for the OpenAPI context system."""


class OpenApiContextError(Exception):
    """Base exception for openapi_context related errors."""
    pass


class DocumentParseError(OpenApiContextError):
    """Exception raised when document text is not valid YAML or JSON."""
    pass


class FormatVersionError(OpenApiContextError):
    """Exception raised when a dialect version string cannot be parsed."""
    pass


class ReferenceResolutionError(OpenApiContextError):
    """Exception raised when a $ref cannot be resolved."""

    def __init__(self, ref: str, reason: str):
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot resolve $ref '{ref}': {reason}")


class ConversionError(OpenApiContextError):
    """Exception raised when a Swagger 2 tree cannot be converted to OpenAPI 3."""
    pass
