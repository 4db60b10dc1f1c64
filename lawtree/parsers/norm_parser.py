"""Parser for <norm> records: outline units, articles and sections.

Each record of a GII document carries a ``metadaten`` block. Records with a
``gliederungseinheit`` open an outline unit (book, part, chapter, ...);
records with an ``enbez`` hold a provision, either a citable article
("§ 14", "Art. 5") or an uncited section ("Inhaltsübersicht", "Anlage 1").
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lawtree.models import (
    Article,
    ContentNode,
    Footnote,
    Outline,
    Section,
    depth_from_code,
)
from lawtree.parsers.content_parser import parse_content
from lawtree.parsers.inline import render_inline
from lawtree.parsers.xml_nodes import (
    XmlNode,
    all_descendants,
    first_child,
    get_attr,
    text_deep,
)

__all__ = [
    "DocumentMetadata",
    "collect_footnotes",
    "depth_from_code",
    "extract_metadata",
    "parse_citation",
    "parse_outline",
    "parse_provision",
]

# "§ 14", "§§ 3a", "§14"
PARAGRAPH_CITATION = re.compile(r"^§+\s*(\d+[a-zA-Z]?)$")

# "Art. 5", "Artikel 12a", "Art 3"
ARTICLE_CITATION = re.compile(r"^Art(?:\.|ikel)?\s*(\d+[a-zA-Z]?)$", re.IGNORECASE)

# Year suffix of an abbreviation, e.g. "BNatSchG 2009"
ABBREVIATION_YEAR = re.compile(r"\s+\d{4}$")

# Containers whose <Content> blocks are editorial notes, not body text
NON_BODY_CONTAINERS = {"fussnoten"}


@dataclass
class DocumentMetadata:
    """Document-level metadata found in a single record."""

    abbreviation: str | None = None
    title: str | None = None


def _metadata_block(norm: XmlNode) -> XmlNode | None:
    return first_child(norm, "metadaten")


def parse_citation(label: str) -> tuple[str, str] | None:
    """Match a provision label against the citation grammar.

    Args:
        label: Raw label (enbez), e.g. "§ 14" or "Art. 5"

    Returns:
        Tuple of (id, normalized label), or None if the label is not a citation
    """
    text = label.strip()

    match = PARAGRAPH_CITATION.match(text)
    if match:
        return match.group(1), f"§ {match.group(1)}"

    match = ARTICLE_CITATION.match(text)
    if match:
        return match.group(1), f"Art. {match.group(1)}"

    return None


def collect_footnotes(norm: XmlNode) -> list[Footnote]:
    """Collect all footnote definitions beneath a record.

    Args:
        norm: The <norm> element

    Returns:
        Footnotes in document order; footnotes without ID are skipped
    """
    footnotes: list[Footnote] = []
    for footnote in all_descendants(norm, "footnote"):
        footnote_id = get_attr(footnote, "id").strip()
        if not footnote_id:
            continue
        md = render_inline(footnote.children).strip()
        footnotes.append(Footnote(id=footnote_id, md=md))
    return footnotes


def parse_outline(norm: XmlNode) -> tuple[Outline, int] | None:
    """Parse a record describing an outline unit.

    Args:
        norm: The <norm> element

    Returns:
        Tuple of (Outline, depth), or None if the record has no outline unit
        with both code and label
    """
    unit = first_child(_metadata_block(norm), "gliederungseinheit")
    if unit is None:
        return None

    code = text_deep(first_child(unit, "gliederungskennzahl"))
    label = text_deep(first_child(unit, "gliederungsbez"))
    title = text_deep(first_child(unit, "gliederungstitel"))

    if not code or not label:
        return None

    node = Outline(id=code, label=label, title=title or None)
    return node, depth_from_code(code)


def _body_contents(norm: XmlNode) -> list[XmlNode]:
    """Find the <Content> blocks holding the body text of a record."""
    contents: list[XmlNode] = []

    def walk(node: XmlNode) -> None:
        if node.tag in NON_BODY_CONTAINERS:
            return
        if node.tag == "content":
            contents.append(node)
            return
        for child in node.children:
            walk(child)

    walk(norm)
    return contents


def _parse_body(norm: XmlNode, id_prefix: str) -> list[ContentNode]:
    children: list[ContentNode] = []
    for content in _body_contents(norm):
        for child in content.children:
            parsed = parse_content(child, id_prefix)
            if parsed is not None:
                children.append(parsed)
    return children


def parse_provision(norm: XmlNode) -> Article | Section | None:
    """Parse a record holding a provision.

    Labels matching the citation grammar produce an Article whose id
    prefixes all paragraph and item ids; other non-empty labels produce a
    Section labelled with the raw label and titled with ``titel``,
    falling back to the label.

    Args:
        norm: The <norm> element

    Returns:
        Article, Section, or None if the record has no label
    """
    meta = _metadata_block(norm)
    label = text_deep(first_child(meta, "enbez"))
    if not label:
        return None

    doknr = get_attr(norm, "doknr").strip() or None
    title = text_deep(first_child(meta, "titel"))
    footnotes = collect_footnotes(norm)

    citation = parse_citation(label)
    if citation is not None:
        article_id, article_label = citation
        return Article(
            id=article_id,
            label=article_label,
            title=title or None,
            doknr=doknr,
            footnotes=footnotes,
            children=_parse_body(norm, article_id),
        )

    return Section(
        label=label,
        title=title or label,
        doknr=doknr,
        footnotes=footnotes,
        children=_parse_body(norm, ""),
    )


def extract_metadata(norm: XmlNode) -> DocumentMetadata:
    """Extract document-level metadata supplied by a record.

    The abbreviation comes from ``jurabk`` (a trailing year is removed), the
    title from ``langue`` or, failing that, ``kurzue``.

    Args:
        norm: The <norm> element

    Returns:
        DocumentMetadata with the fields this record supplies
    """
    meta = _metadata_block(norm)
    if meta is None:
        return DocumentMetadata()

    abbreviation = ABBREVIATION_YEAR.sub("", text_deep(first_child(meta, "jurabk")))

    title = text_deep(first_child(meta, "langue"))
    if not title:
        title = text_deep(first_child(meta, "kurzue"))

    return DocumentMetadata(
        abbreviation=abbreviation or None,
        title=title or None,
    )
