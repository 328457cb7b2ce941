from pathlib import Path

import pytest

from restdoc_params.errors import DocumentFormatError
from restdoc_params.openapi import descriptors_for_location, parse_operation_parameters

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseOperationParameters:
    def test_query_parameters(self):
        descriptors = parse_operation_parameters(FIXTURES / "petstore.yaml", "get", "/pets")
        assert [d.name for d in descriptors] == ["page", "size"]
        page = descriptors[0]
        assert page.description == "Page number"
        assert page.optional is True
        assert page.attributes == {"location": "query", "type": "integer", "minimum": 0}

    def test_operation_overrides_path_level(self):
        descriptors = parse_operation_parameters(FIXTURES / "petstore.yaml", "GET", "/pets/{petId}")
        pet_id = [d for d in descriptors if d.name == "petId"][0]
        assert pet_id.description == "The id of the pet to retrieve"
        assert pet_id.attributes["type"] == "integer"
        assert pet_id.optional is False
        assert {d.name for d in descriptors} == {"petId", "X-Request-Id", "fields"}

    def test_swagger2_parameter_type(self, tmp_path):
        f = tmp_path / "swagger.yaml"
        f.write_text(
            "swagger: '2.0'\n"
            "paths:\n"
            "  /pets:\n"
            "    post:\n"
            "      parameters:\n"
            "        - {name: name, in: formData, type: string, required: true, description: Pet name}\n"
        )
        descriptors = parse_operation_parameters(f, "POST", "/pets")
        assert descriptors[0].attributes == {"location": "formData", "type": "string"}

    def test_local_refs_resolved(self):
        descriptors = parse_operation_parameters(FIXTURES / "refs.yaml", "GET", "/pets")
        assert [d.name for d in descriptors] == ["page", "size"]
        assert descriptors[0].attributes == {"location": "query", "type": "integer", "minimum": 1}
        assert descriptors[1].optional is False

    def test_unresolvable_ref(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text(
            "paths:\n"
            "  /pets:\n"
            "    get:\n"
            "      parameters:\n"
            "        - $ref: '#/components/parameters/Missing'\n"
        )
        with pytest.raises(DocumentFormatError, match="unresolvable reference"):
            parse_operation_parameters(f, "GET", "/pets")

    def test_parameter_without_name(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text(
            "paths:\n"
            "  /pets:\n"
            "    get:\n"
            "      parameters:\n"
            "        - {in: query, description: Page number}\n"
        )
        with pytest.raises(DocumentFormatError, match="has no name"):
            parse_operation_parameters(f, "GET", "/pets")

    def test_null_paths(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text("openapi: '3.0.0'\npaths:\n")
        with pytest.raises(DocumentFormatError, match="no path"):
            parse_operation_parameters(f, "GET", "/pets")

    def test_paths_not_a_mapping(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text("paths: [/pets]\n")
        with pytest.raises(DocumentFormatError, match="'paths' must be a mapping"):
            parse_operation_parameters(f, "GET", "/pets")

    def test_path_item_not_a_mapping(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text("paths:\n  /pets: nope\n")
        with pytest.raises(DocumentFormatError, match="must be a mapping"):
            parse_operation_parameters(f, "GET", "/pets")

    def test_unknown_path(self):
        with pytest.raises(DocumentFormatError):
            parse_operation_parameters(FIXTURES / "petstore.yaml", "GET", "/owners")

    def test_unknown_method(self):
        with pytest.raises(DocumentFormatError):
            parse_operation_parameters(FIXTURES / "petstore.yaml", "DELETE", "/pets")


class TestDescriptorsForLocation:
    def test_filter_by_location(self):
        descriptors = parse_operation_parameters(FIXTURES / "petstore.yaml", "GET", "/pets/{petId}")
        assert [d.name for d in descriptors_for_location(descriptors, "path")] == ["petId"]
        assert [d.name for d in descriptors_for_location(descriptors, "query", "formData")] == ["fields"]
