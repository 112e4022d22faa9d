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

"""YAML/JSON document loader with source-location support."""

import json
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..exceptions import DocumentParseError
from ..tree.json_pointers import append

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """Loads API description documents from text."""

    @staticmethod
    def _stringify_keys(data: Any) -> Any:
        # YAML reads `200:` as an int; pointers and schema checks need string keys.
        if isinstance(data, dict):
            return {str(key): YamlParser._stringify_keys(value) for key, value in data.items()}
        if isinstance(data, list):
            return [YamlParser._stringify_keys(item) for item in data]
        return data

    @classmethod
    def build_source_map(cls, content: str) -> SourceMap:
        """Build a mapping from JSON pointers to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Documents that YAML cannot compose (e.g. tab-indented JSON) have no locations.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, append(path, key))
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, append(path, idx))

        _walk(root, "")
        return source_map

    def load_document(self, content: str) -> Any:
        """Load document text as JSON (when it looks like a JSON object) or YAML.

        Raises:
            DocumentParseError: If the text is neither
        """
        if content.lstrip().startswith("{"):
            try:
                return self._stringify_keys(json.loads(content))
            except json.JSONDecodeError:
                logger.debug("Content is not strict JSON, retrying as YAML")

        try:
            return self._stringify_keys(yaml.safe_load(content))
        except yaml.YAMLError as exc:
            raise DocumentParseError(f"Failed to parse document: {exc}") from exc

    def read_file(self, file_path: Union[str, Path]) -> str:
        """Read a document file as text.

        Raises:
            DocumentParseError: If the file cannot be read
        """
        path = Path(file_path)

        if not path.is_file():
            raise DocumentParseError(f"Document file not found: {path}")

        try:
            logger.debug(f"Reading document file: {path}")
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentParseError(f"Failed to read document file {path}: {exc}") from exc


# Global parser instance
yaml_parser = YamlParser()
