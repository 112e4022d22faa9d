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

"""
Tests for the document check CLI.
"""

import json

import pytest

from openapi_context.check import check_file, check_files
from openapi_context.check.run_check import find_documents, main
from openapi_context.config import ContextConfig, context_config


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(ContextConfig, "set_logging", lambda self: None)


@pytest.fixture
def documents(tmp_path, openapi_doc, swagger_doc):
    (tmp_path / "openapi.yaml").write_text(openapi_doc)
    (tmp_path / "swagger.yml").write_text(swagger_doc)
    (tmp_path / "notes.txt").write_text("not a document")
    return tmp_path


@pytest.fixture
def invalid(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text("just: text\n")
    return path


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestCli:
    """Exit codes and output formats."""

    def test_valid_documents(self, documents, capsys):
        assert _run([str(documents)]) == 0
        assert "Check succeeded with no errors." in capsys.readouterr().out

    def test_invalid_document(self, invalid, capsys):
        assert _run([str(invalid)]) == 1
        out = capsys.readouterr().out
        assert "ERROR:1:1: Unable to parse specification" in out

    def test_json_output(self, invalid, capsys):
        assert _run([str(invalid), "--format", "json"]) == 1
        output = json.loads(capsys.readouterr().out)
        assert output["files"] == 1
        assert output["errors"] == 1
        [error] = output["results"][0]["errors"]
        assert error == {"message": "Unable to parse specification", "line": 1, "column": 1, "pointer": ""}

    def test_github_actions_output(self, invalid, capsys):
        assert _run([str(invalid), "--format", "github-actions"]) == 1
        out = capsys.readouterr().out
        assert out.startswith(f"::error file={invalid},line=1::")

    def test_no_documents(self, tmp_path, capsys):
        assert _run([str(tmp_path / "missing.yaml")]) == 1
        assert "No documents found." in capsys.readouterr().err

    def test_log_level_option(self, documents, monkeypatch):
        monkeypatch.setattr(context_config, "log_level", "INFO")
        _run([str(documents), "--log-level", "DEBUG"])
        assert context_config.log_level == "DEBUG"


class TestCheckResults:
    """Per-document results."""

    def test_find_documents(self, documents):
        assert [p.name for p in find_documents([str(documents)])] == ["openapi.yaml", "swagger.yml"]

    def test_dialects(self, documents):
        results = check_files(find_documents([str(documents)]))
        assert [r.dialect for r in results] == ["openapi", "swagger"]
        assert all(r.ok for r in results)

    def test_messages_become_warnings(self, tmp_path):
        path = tmp_path / "untitled.yaml"
        path.write_text("openapi: 3.0.0\ninfo:\n  version: v\npaths: {}\n")
        result = check_file(path)
        assert result.ok
        assert result.warnings == [
            {"message": "attribute info.title is missing", "line": 3, "column": 3, "pointer": "/info"}
        ]

    def test_conversion_messages_become_warnings(self, tmp_path):
        path = tmp_path / "legacy.yaml"
        path.write_text(
            "swagger: '2.0'\ninfo: {title: t, version: v}\npaths:\n  /a:\n    get:\n      parameters:\n"
            "        - {name: ids, in: query, type: array, items: {type: string}, collectionFormat: tsv}\n"
            "      responses:\n        '200': {description: ok}\n"
        )
        result = check_file(path)
        assert result.ok
        assert result.dialect == "swagger"
        assert result.warnings == [
            {"message": "Unsupported collectionFormat 'tsv' of parameter 'ids'", "line": 1, "column": 1, "pointer": ""}
        ]

    def test_unreadable_file(self, tmp_path):
        result = check_file(tmp_path / "absent.yaml")
        assert not result.ok
        assert result.errors[0]["message"].startswith("Document file not found:")
