"""Assemble a Document tree from a GII statute.

The source is a flat sequence of <norm> records. Outline records open a
grouping whose depth is derived from its code; provisions are attached to
the innermost open grouping. A stack of open groupings is kept per call.
"""

from __future__ import annotations

from pathlib import Path

from lawtree.logging_config import logger
from lawtree.models import Document, Outline, StructuralNode
from lawtree.parsers.norm_parser import (
    extract_metadata,
    parse_outline,
    parse_provision,
)
from lawtree.parsers.xml_nodes import XmlNode, all_descendants, parse_xml


def _attach(
    document: Document, stack: list[tuple[Outline, int]], node: StructuralNode
) -> None:
    if stack:
        stack[-1][0].children.append(node)
    else:
        document.children.append(node)


def _apply_metadata(document: Document, norm: XmlNode) -> None:
    """Fill document fields not set yet from a record's metadata."""
    metadata = extract_metadata(norm)
    if document.abbreviation is None and metadata.abbreviation:
        document.abbreviation = metadata.abbreviation
    if document.title is None and metadata.title:
        document.title = metadata.title


def convert(xml: bytes | str) -> Document:
    """Convert a GII XML document into a Document tree.

    Args:
        xml: The complete XML document

    Returns:
        Document with outline groupings, articles and sections in source order

    Raises:
        XmlParseError: If the input is not well-formed XML
    """
    root = parse_xml(xml)
    document = Document()
    stack: list[tuple[Outline, int]] = []

    norms = all_descendants(root, "norm")

    with logger.indent_block(f"Converting {len(norms)} records"):
        # Open outline units add to the indentation of the current block
        base_level = logger.level

        for index, norm in enumerate(norms, start=1):
            _apply_metadata(document, norm)

            outline = parse_outline(norm)
            if outline is not None:
                node, depth = outline
                while stack and stack[-1][1] >= depth:
                    stack.pop()
                with logger.at_level(base_level + len(stack)):
                    logger.debug(f"{node.label} ({node.id}, depth {depth})")
                _attach(document, stack, node)
                stack.append((node, depth))
                continue

            provision = parse_provision(norm)
            if provision is not None:
                with logger.at_level(base_level + len(stack)):
                    logger.debug(f"{provision.type} {provision.label}")
                _attach(document, stack, provision)
                continue

            logger.debug(f"Skipping record {index}: neither outline nor provision")

    return document


def convert_file(path: Path | str) -> Document:
    """Read and convert a GII XML file.

    Args:
        path: Path to the XML file

    Returns:
        The converted Document
    """
    path = Path(path)
    logger.debug(f"Reading {path}")
    return convert(path.read_bytes())
