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

"""JSON Schema loader for the structural checks of each dialect."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..exceptions import FormatVersionError
from ..schema import SCHEMA_DIR
from ..utils.format_version import SemanticVersion, parse_format_version

logger = logging.getLogger(__name__)

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(dialect: str, version: str) -> Path:
    """Get the path to the schema of ``dialect`` at ``version`` (``MAJOR.MINOR``)."""
    return SCHEMA_DIR / dialect / f"{version}.json"


def available_versions(dialect: str) -> List[SemanticVersion]:
    dialect_dir = SCHEMA_DIR / dialect
    if not dialect_dir.is_dir():
        return []

    versions = []
    for schema_file in dialect_dir.glob("*.json"):
        try:
            versions.append(parse_format_version(schema_file.stem))
        except FormatVersionError:
            # Skip files that don't match the version pattern
            continue
    return sorted(versions, key=lambda v: (v.major, v.minor))


def resolve_schema_version(dialect: str, version: str) -> str:
    """Resolve the schema to use for a document declaring ``version``.

    Version resolution rules:
    - Major version must match exactly
    - If the same minor version exists, use it
    - Otherwise use the closest larger minor version, then the largest smaller one

    Returns:
        Resolved ``MAJOR.MINOR`` string, or the requested one if nothing matches
    """
    try:
        parsed_version = parse_format_version(version)
    except FormatVersionError:
        # If version parsing fails, return original
        return version

    candidates = [v for v in available_versions(dialect) if v.major == parsed_version.major]
    if not candidates:
        return parsed_version.short

    same_minor = [v for v in candidates if v.minor == parsed_version.minor]
    if same_minor:
        return same_minor[0].short

    larger = [v for v in candidates if v.minor > parsed_version.minor]
    if larger:
        return min(larger, key=lambda v: v.minor).short

    return max(candidates, key=lambda v: v.minor).short


def load_schema(dialect: str, version: str) -> dict:
    """Load the JSON Schema for ``dialect`` documents declaring ``version``.

    Raises:
        FileNotFoundError: If no schema exists for the dialect's major version
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    resolved_version = resolve_schema_version(dialect, version)

    cache_key = f"{dialect}-v{resolved_version}"
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    schema_path = get_schema_path(dialect, resolved_version)
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found for {dialect} version {version} "
            f"(resolved to {resolved_version}): {schema_path}"
        )

    logger.debug(f"Loading {dialect} schema {resolved_version} for version {version}")
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    _SCHEMA_CACHE[cache_key] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
