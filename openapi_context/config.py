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

"""Configuration management for context creation."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging, level_from_name

ENV_PREFIX = "OPENAPI_CONTEXT_"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(ENV_PREFIX + name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ContextConfig:
    """Configuration class for parsing and context creation."""
    log_level: str = "INFO"
    print_level: str = "WARNING"

    # Expand local $ref nodes after parsing and after conversion
    resolve_fully: bool = True

    # Vendor extension holding per-rule suppression directives
    ignore_extension: str = "x-lint-ignore"

    @classmethod
    def from_env(cls) -> 'ContextConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(ENV_PREFIX + 'LOG_LEVEL', 'INFO'),
            print_level=os.getenv(ENV_PREFIX + 'PRINT_LEVEL', 'WARNING'),
            resolve_fully=_env_flag('RESOLVE_FULLY', 'true'),
            ignore_extension=os.getenv(ENV_PREFIX + 'IGNORE_EXTENSION', 'x-lint-ignore'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = level_from_name(self.log_level, logging.INFO)
        stderr_level = level_from_name(self.print_level, logging.WARNING)

        configure_split_stream_logging(level=level, stderr_level=stderr_level)

        return logging.getLogger('openapi_context')


# Global configuration instance
context_config = ContextConfig.from_env()
