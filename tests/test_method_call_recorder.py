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

import pytest

from openapi_context.models.openapi import OpenAPI
from openapi_context.parsing.yaml_parser import yaml_parser
from openapi_context.tree.method_call_recorder import MethodCallRecorder, unwrap


@pytest.fixture
def tree(openapi_doc):
    return OpenAPI.from_dict(yaml_parser.load_document(openapi_doc))


@pytest.fixture
def recorder(tree):
    return MethodCallRecorder(tree).skip_methods("extensions")


class TestRecording:
    """The pointer follows the last value produced through the proxy."""

    def test_starts_at_root(self, recorder):
        assert recorder.pointer == ""

    def test_attribute_and_key_access(self, recorder):
        api = recorder.proxy
        api.paths["/pets"].get.responses["200"]
        assert recorder.pointer == "/paths/~1pets/get/responses/200"

    def test_scalar_access(self, recorder):
        assert recorder.proxy.info.title == "Pets"
        assert recorder.pointer == "/info/title"

    def test_sequence_iteration(self, recorder):
        urls = [server.url for server in recorder.proxy.servers]
        assert urls == ["https://api.example.com/v1"]
        assert recorder.pointer == "/servers/0/url"

    def test_negative_index_is_normalized(self, recorder):
        recorder.proxy.servers[-1]
        assert recorder.pointer == "/servers/0"

    def test_mapping_items(self, recorder):
        seen = []
        for path, item in recorder.proxy.paths.items():
            seen.append((path, recorder.pointer))
        assert seen == [("/pets", "/paths/~1pets")]

    def test_method_results_are_recorded(self, recorder):
        pointers = []
        for method, operation in recorder.proxy.paths["/pets"].read_operations_map().items():
            pointers.append(recorder.pointer)
        assert pointers == ["/paths/~1pets/get", "/paths/~1pets/post"]


class TestUnrecordedAccess:
    """Inspecting a container does not move the pointer."""

    def test_keys_membership_and_length(self, recorder):
        paths = recorder.proxy.paths
        assert recorder.pointer == "/paths"
        assert list(paths) == ["/pets"]
        assert "/pets" in paths
        assert len(paths) == 1
        assert recorder.pointer == "/paths"

    def test_skipped_methods_return_raw_values(self, recorder, tree):
        pet = recorder.proxy.components.schemas["Pet"]
        extensions = pet.extensions
        assert extensions is tree.components.schemas["Pet"].extensions
        assert recorder.pointer == "/components/schemas/Pet"


class TestProxy:
    """The proxy stands in for the node it wraps."""

    def test_isinstance(self, recorder):
        assert isinstance(recorder.proxy, OpenAPI)

    def test_unwrap(self, recorder, tree):
        assert unwrap(recorder.proxy) is tree
        assert unwrap(recorder.proxy.info) is tree.info
        assert unwrap("plain") == "plain"

    def test_equality_and_hash_follow_target(self, recorder, tree):
        assert recorder.proxy == tree
        assert hash(recorder.proxy) == hash(tree)
        assert recorder.proxy.info != tree

    def test_read_only(self, recorder):
        with pytest.raises(AttributeError):
            recorder.proxy.info = None
