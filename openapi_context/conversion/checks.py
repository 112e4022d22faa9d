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

"""Fix-ups applied to a Swagger 2 tree before it is converted.

Some shapes are accepted by the Swagger 2 reader but make the converter fail.
The recoverable ones are patched in place; the others become violations.
"""

import logging
from typing import List

from ..models import swagger
from ..rule.violation import Violation
from ..tree.json_pointers import compile_pointer

logger = logging.getLogger(__name__)

SECURITY_DEFINITION_TYPES = ("basic", "apiKey", "oauth2")


def pre_convert_checks(tree: swagger.Swagger) -> List[Violation]:
    """Patch ``tree`` in place; return violations for what cannot be patched."""
    violations: List[Violation] = []

    if tree.info is None:
        logger.debug("Document has no info, using an empty one")
        tree.info = swagger.Info()

    for name, definition in (tree.security_definitions or {}).items():
        if definition.type == "oauth2":
            if definition.flow is None:
                definition.flow = ""
            if definition.scopes is None:
                definition.scopes = {}
        elif definition.type not in SECURITY_DEFINITION_TYPES:
            violations.append(
                Violation(
                    f"Security definition '{name}' has unknown type '{definition.type}'",
                    compile_pointer(["securityDefinitions", name, "type"]),
                )
            )

    return violations
