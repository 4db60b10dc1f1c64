"""JSON and YAML writers for converted documents."""

import io
import json
from functools import lru_cache
from pathlib import Path

import jsonschema
import ruamel.yaml

from lawtree.config import SCHEMA_ID, SCHEMA_PATH
from lawtree.models import Document

YAML_WIDTH = 100


def generate_document_dict(document: Document, source: str | None = None) -> dict:
    """Generate a schema-compliant dictionary from a Document.

    Args:
        document: The converted document
        source: Optional source reference (file name or URL)

    Returns:
        Dictionary ready for JSON or YAML serialization
    """
    result = {"$schema": SCHEMA_ID}
    if source:
        result["source"] = source
    result.update(document.to_dict())
    return result


def _write_text(content: str, output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Write with Unix line endings
    with open(output_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)

    return output_path


def dump_json(data: dict) -> str:
    """Serialize a document dictionary as indented UTF-8 JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_json(document: Document, output_path: Path, source: str | None = None) -> Path:
    """Save a Document as a JSON file.

    Args:
        document: The document to save
        output_path: Target file; parent directories are created
        source: Optional source reference

    Returns:
        Path to the saved file
    """
    data = generate_document_dict(document, source)
    return _write_text(dump_json(data), output_path)


def dump_yaml(data: dict) -> str:
    """Serialize a document dictionary as block-style YAML."""
    yaml = ruamel.yaml.YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = YAML_WIDTH
    yaml.explicit_start = True  # Add --- document start
    yaml.allow_unicode = True

    # ruamel.yaml adds trailing spaces when wrapping long values
    buffer = io.StringIO()
    yaml.dump(data, buffer)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines()) + "\n"


def save_yaml(document: Document, output_path: Path, source: str | None = None) -> Path:
    """Save a Document as a YAML file.

    Args:
        document: The document to save
        output_path: Target file; parent directories are created
        source: Optional source reference

    Returns:
        Path to the saved file
    """
    data = generate_document_dict(document, source)
    return _write_text(dump_yaml(data), output_path)


@lru_cache(maxsize=1)
def load_schema() -> dict:
    """Load the bundled output schema."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def validate_document_dict(data: dict) -> None:
    """Validate a document dictionary against the bundled schema.

    Args:
        data: Dictionary as produced by ``generate_document_dict``

    Raises:
        jsonschema.ValidationError: If the data does not match the schema
    """
    jsonschema.validate(instance=data, schema=load_schema())
