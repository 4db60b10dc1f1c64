"""End-to-end integration tests for the conversion pipeline."""

import json
from pathlib import Path

import jsonschema
import pytest
import ruamel.yaml

from lawtree.models import Document, node_from_dict
from lawtree.parsers.converter import convert_file
from lawtree.storage.writer import (
    generate_document_dict,
    load_schema,
    save_json,
    save_yaml,
)


@pytest.fixture
def document(sample_statute_path: Path) -> Document:
    return convert_file(sample_statute_path)


class TestPipeline:
    """Convert the sample statute and persist it."""

    def test_validates_against_schema(self, document: Document) -> None:
        """Test that generated output validates against the JSON schema."""
        jsonschema.validate(generate_document_dict(document), load_schema())

    def test_json_output_reloads_to_same_tree(self, document: Document, tmp_path: Path) -> None:
        output = save_json(document, tmp_path / "bnatschg_2009.json")
        with open(output, encoding="utf-8") as f:
            loaded = json.load(f)

        jsonschema.validate(loaded, load_schema())
        del loaded["$schema"]
        assert node_from_dict(loaded) == document

    def test_yaml_and_json_agree(self, document: Document, tmp_path: Path) -> None:
        """Both output formats carry the same data."""
        json_path = save_json(document, tmp_path / "bnatschg_2009.json")
        yaml_path = save_yaml(document, tmp_path / "bnatschg_2009.yaml")

        yaml = ruamel.yaml.YAML(typ="safe")
        with open(yaml_path, encoding="utf-8") as f:
            from_yaml = yaml.load(f)
        with open(json_path, encoding="utf-8") as f:
            from_json = json.load(f)

        assert from_yaml == from_json

    def test_node_statistics(self, document: Document) -> None:
        """The sample statute yields the expected number of nodes per kind."""
        counts: dict[str, int] = {}
        for node in document.iter_nodes():
            counts[node.type] = counts.get(node.type, 0) + 1

        assert counts["outline"] == 3
        assert counts["article"] == 3
        assert counts["section"] == 2
        assert counts["table"] == 1
        assert counts["image"] == 1
        assert counts["list"] == 3
        assert counts["li"] == 5
