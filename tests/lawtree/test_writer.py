"""Tests for the JSON and YAML writers."""

import json
from pathlib import Path

import jsonschema
import pytest
import ruamel.yaml

from lawtree.config import SCHEMA_ID
from lawtree.models import Article, Document, Outline, Paragraph, TextRun
from lawtree.storage.writer import (
    dump_yaml,
    generate_document_dict,
    save_json,
    save_yaml,
    validate_document_dict,
)


@pytest.fixture
def document() -> Document:
    return Document(
        abbreviation="BNatSchG",
        title="Gesetz über Naturschutz und Landschaftspflege",
        children=[
            Outline(
                id="010",
                label="Kapitel 1",
                children=[
                    Article(
                        id="1",
                        label="§ 1",
                        children=[Paragraph(label="(1)", id="1.1", children=[TextRun(md="Natur schützen.")])],
                    )
                ],
            )
        ],
    )


class TestGenerateDocumentDict:
    """Tests for generate_document_dict function."""

    def test_schema_reference_first(self, document: Document) -> None:
        data = generate_document_dict(document)

        assert list(data)[0] == "$schema"
        assert data["$schema"] == SCHEMA_ID
        assert data["type"] == "document"

    def test_source(self, document: Document) -> None:
        assert generate_document_dict(document, "BJNR254210009.xml")["source"] == "BJNR254210009.xml"

    def test_no_source(self, document: Document) -> None:
        assert "source" not in generate_document_dict(document)


class TestSaveJson:
    """Tests for save_json function."""

    def test_creates_parent_directories(self, document: Document, tmp_path: Path) -> None:
        output = save_json(document, tmp_path / "out" / "bnatschg.json")

        assert output.exists()
        assert output == tmp_path / "out" / "bnatschg.json"

    def test_utf8_without_escapes(self, document: Document, tmp_path: Path) -> None:
        output = save_json(document, tmp_path / "bnatschg.json")
        content = output.read_text(encoding="utf-8")

        assert "Gesetz über Naturschutz" in content
        assert "§ 1" in content
        assert "\\u00fc" not in content

    def test_indented_with_unix_line_endings(self, document: Document, tmp_path: Path) -> None:
        output = save_json(document, tmp_path / "bnatschg.json")
        raw = output.read_bytes()

        assert b"\r\n" not in raw
        assert raw.endswith(b"}\n")
        assert b'\n  "type": "document"' in raw

    def test_content_round_trips(self, document: Document, tmp_path: Path) -> None:
        output = save_json(document, tmp_path / "bnatschg.json")
        loaded = json.loads(output.read_text(encoding="utf-8"))

        assert loaded == generate_document_dict(document)


class TestSaveYaml:
    """Tests for save_yaml function."""

    def test_explicit_document_start(self, document: Document, tmp_path: Path) -> None:
        output = save_yaml(document, tmp_path / "bnatschg.yaml")
        assert output.read_text(encoding="utf-8").startswith("---\n")

    def test_no_trailing_spaces(self, document: Document, tmp_path: Path) -> None:
        output = save_yaml(document, tmp_path / "bnatschg.yaml")
        for line in output.read_text(encoding="utf-8").splitlines():
            assert line == line.rstrip()

    def test_content_round_trips(self, document: Document, tmp_path: Path) -> None:
        output = save_yaml(document, tmp_path / "bnatschg.yaml")
        yaml = ruamel.yaml.YAML(typ="safe")
        with open(output, encoding="utf-8") as f:
            loaded = yaml.load(f)

        assert loaded == generate_document_dict(document)

    def test_unicode_kept(self, document: Document) -> None:
        assert "§ 1" in dump_yaml(generate_document_dict(document))


class TestValidateDocumentDict:
    """Tests for schema validation of the output."""

    def test_valid_document(self, document: Document) -> None:
        validate_document_dict(generate_document_dict(document))  # Should not raise

    def test_missing_children(self) -> None:
        with pytest.raises(jsonschema.ValidationError):
            validate_document_dict({"type": "document"})

    def test_unknown_node_kind(self) -> None:
        data = {"type": "document", "children": [{"type": "marquee", "children": []}]}
        with pytest.raises(jsonschema.ValidationError):
            validate_document_dict(data)

    def test_label_must_be_normalized(self) -> None:
        data = {
            "type": "document",
            "children": [{"type": "article", "id": "1", "label": "Paragraph 1", "children": []}],
        }
        with pytest.raises(jsonschema.ValidationError):
            validate_document_dict(data)
