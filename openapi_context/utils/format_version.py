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

"""Dialect version utilities.

The root discriminator of an API description (``openapi: 3.0.3`` or
``swagger: "2.0"``) declares which dialect version the document conforms to.

Compatibility rule (semver-like):
  * **Major** must match the supported version of the dialect.
  * **Minor** of the document newer than the tool → warning.
  * **Patch** is ignored; it may also be omitted (``2.0``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .. import SUPPORTED_VERSIONS
from ..exceptions import FormatVersionError


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def short(self) -> str:
        return f"{self.major}.{self.minor}"


def parse_format_version(raw: Any) -> SemanticVersion:
    """Parse a version like ``3.0.3`` or ``2.0``.

    YAML reads an unquoted ``swagger: 2.0`` as a float, so numbers are accepted
    and formatted before matching.

    Raises:
        FormatVersionError: If the value cannot be parsed.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        raw = str(raw)
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid version string: '{raw}'. "
            "Expected 'MAJOR.MINOR[.PATCH]' (e.g. '3.0.3')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


# ---- supported versions ----------------------------------------------------

_SUPPORTED: Dict[str, SemanticVersion] = {}


def get_supported_format_version(dialect: str) -> SemanticVersion:
    """Return the version of ``dialect`` supported by this tool (cached)."""
    if dialect not in _SUPPORTED:
        try:
            raw = SUPPORTED_VERSIONS[dialect]
        except KeyError:
            raise FormatVersionError(f"Unknown dialect: '{dialect}'") from None
        _SUPPORTED[dialect] = parse_format_version(raw)
    return _SUPPORTED[dialect]


# ---- compatibility check ----------------------------------------------------


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of a dialect-version compatibility check."""

    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None
    supported_version: Optional[SemanticVersion] = None
    minor_newer: bool = False


def check_format_version(raw_version: Any, dialect: str) -> VersionCheckResult:
    """Check whether ``raw_version`` can be read as ``dialect``.

    * Missing or unparsable version → incompatible.
    * Major mismatch → incompatible.
    * Document minor > tool minor → compatible with ``minor_newer=True``.
    """
    supported = get_supported_format_version(dialect)

    if raw_version is None:
        return VersionCheckResult(
            compatible=False,
            message=f"Missing '{dialect}' version field.",
            supported_version=supported,
        )

    try:
        file_ver = parse_format_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(
            compatible=False,
            message=str(exc),
            supported_version=supported,
        )

    if file_ver.major != supported.major:
        return VersionCheckResult(
            compatible=False,
            message=(
                f"Incompatible {dialect} version: document declares {file_ver} "
                f"but this tool supports major version {supported.major} "
                f"(supported: {supported})."
            ),
            file_version=file_ver,
            supported_version=supported,
        )

    if file_ver.minor > supported.minor:
        return VersionCheckResult(
            compatible=True,
            minor_newer=True,
            message=(
                f"{dialect} version {file_ver} has a newer minor version than "
                f"the supported {supported}. Some fields may be ignored."
            ),
            file_version=file_ver,
            supported_version=supported,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"{dialect} version {file_ver} is compatible (supported: {supported}).",
        file_version=file_ver,
        supported_version=supported,
    )
