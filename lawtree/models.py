"""Data models for the converted law tree.

Every node kind is a dataclass carrying a ``type`` discriminant. Parents own
their children; no node references its parent. ``to_dict()`` produces the
JSON form (optional fields omitted when empty), ``node_from_dict()`` reads it
back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, Union

from lawtree.config import OUTLINE_CHUNK_WIDTH, OUTLINE_ROOT_WIDTH


class ListKind(str, Enum):
    """Whether list items are numbered."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class ListStyle(str, Enum):
    """Marker style of a list."""

    ARABIC = "arabic"
    ALPHA_LOWER = "alpha-lower"
    ALPHA_UPPER = "alpha-upper"
    ROMAN_LOWER = "roman-lower"
    ROMAN_UPPER = "roman-upper"
    BULLET = "bullet"
    DASH = "dash"
    CUSTOM = "custom"


def depth_from_code(code: str) -> int:
    """Compute the nesting depth of an outline code (gliederungskennzahl).

    Codes with at most ``OUTLINE_ROOT_WIDTH`` digits are top-level (depth 1);
    every further chunk of ``OUTLINE_CHUNK_WIDTH`` digits adds one level.

    Examples:
        "05" -> 1, "010" -> 1, "050030" -> 2, "010020030" -> 3
    """
    digits = "".join(ch for ch in str(code) if ch.isdigit())
    if len(digits) <= OUTLINE_ROOT_WIDTH:
        return 1
    return 1 + math.ceil((len(digits) - OUTLINE_ROOT_WIDTH) / OUTLINE_CHUNK_WIDTH)


def _put(result: dict[str, Any], key: str, value: Any) -> None:
    """Add an optional field, skipping None and empty values."""
    if value is None or value == "" or value == []:
        return
    result[key] = value


@dataclass
class TextRun:
    """Rendered inline text (markdown plus a small HTML subset)."""

    type: ClassVar[str] = "md"

    md: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "md": self.md}


@dataclass
class Image:
    """An embedded image reference."""

    type: ClassVar[str] = "image"

    src: str
    alt: str | None = None
    width: int | None = None
    height: int | None = None
    align: str | None = None
    position: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "src": self.src}
        _put(result, "alt", self.alt)
        _put(result, "width", self.width)
        _put(result, "height", self.height)
        _put(result, "align", self.align)
        _put(result, "position", self.position)
        return result


@dataclass
class TableCell:
    """A single table cell.

    ``colspan`` is only set when the cell spans more than one column.
    """

    content: str = ""
    colspan: int | None = None
    children: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"content": self.content}
        if self.colspan and self.colspan > 1:
            result["colspan"] = self.colspan
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Table:
    """A table with an optional header row and body rows."""

    type: ClassVar[str] = "table"

    rows: list[list[TableCell]] = field(default_factory=list)
    headers: list[TableCell] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.headers:
            result["headers"] = [cell.to_dict() for cell in self.headers]
        result["rows"] = [[cell.to_dict() for cell in row] for row in self.rows]
        return result


@dataclass
class ListItem:
    """A list item with mixed content."""

    type: ClassVar[str] = "li"

    label: str | None = None
    id: str | None = None
    children: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        _put(result, "label", self.label)
        _put(result, "id", self.id)
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class ListNode:
    """An ordered or unordered list (source: definition list)."""

    type: ClassVar[str] = "list"

    kind: ListKind = ListKind.UNORDERED
    style: ListStyle = ListStyle.CUSTOM
    symbol: str | None = None
    children: list[ListItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type,
            "kind": self.kind.value,
            "style": self.style.value,
        }
        _put(result, "symbol", self.symbol)
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Paragraph:
    """A paragraph (Absatz), optionally numbered like "(3)"."""

    type: ClassVar[str] = "p"

    label: str | None = None
    id: str | None = None
    children: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        _put(result, "label", self.label)
        _put(result, "id", self.id)
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Footnote:
    """A footnote definition, referenced from text as ``[^id]``."""

    id: str
    md: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "md": self.md}


@dataclass
class Article:
    """A citation-bearing provision such as "§ 14" or "Art. 5"."""

    type: ClassVar[str] = "article"

    id: str
    label: str
    title: str | None = None
    doknr: str | None = None
    footnotes: list[Footnote] = field(default_factory=list)
    children: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "id": self.id, "label": self.label}
        _put(result, "title", self.title)
        _put(result, "doknr", self.doknr)
        if self.footnotes:
            result["footnotes"] = [fn.to_dict() for fn in self.footnotes]
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Section:
    """An uncited block such as a table of contents or a preamble."""

    type: ClassVar[str] = "section"

    label: str | None = None
    title: str | None = None
    doknr: str | None = None
    footnotes: list[Footnote] = field(default_factory=list)
    children: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        _put(result, "label", self.label)
        _put(result, "title", self.title)
        _put(result, "doknr", self.doknr)
        if self.footnotes:
            result["footnotes"] = [fn.to_dict() for fn in self.footnotes]
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Outline:
    """A structural grouping (book, part, chapter, ...) from the outline."""

    type: ClassVar[str] = "outline"

    id: str
    label: str
    title: str | None = None
    children: list[StructuralNode] = field(default_factory=list)

    @property
    def depth(self) -> int:
        """Nesting depth derived from the outline code."""
        return depth_from_code(self.id)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "id": self.id, "label": self.label}
        _put(result, "title", self.title)
        result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Document:
    """Root of a converted law."""

    type: ClassVar[str] = "document"

    abbreviation: str | None = None
    title: str | None = None
    children: list[StructuralNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        _put(result, "abbreviation", self.abbreviation)
        _put(result, "title", self.title)
        result["children"] = [child.to_dict() for child in self.children]
        return result

    def iter_nodes(self) -> Iterator[Node]:
        """Walk all nodes depth-first in document order (root included)."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(_node_children(node)))


ContentNode = Union[TextRun, Paragraph, ListNode, Table, Image]
StructuralNode = Union[Outline, Article, Section]
Node = Union[Document, Outline, Article, Section, Paragraph, ListNode, ListItem, Table, Image, TextRun]


def _node_children(node: Node) -> list[Node]:
    if isinstance(node, Table):
        cells = [*(node.headers or []), *(cell for row in node.rows for cell in row)]
        return [child for cell in cells for child in cell.children]
    return list(getattr(node, "children", []))


def _cell_from_dict(data: dict[str, Any]) -> TableCell:
    return TableCell(
        content=data.get("content", ""),
        colspan=data.get("colspan"),
        children=[node_from_dict(child) for child in data.get("children", [])],
    )


def _footnotes_from_dict(data: dict[str, Any]) -> list[Footnote]:
    return [Footnote(id=fn["id"], md=fn["md"]) for fn in data.get("footnotes", [])]


def node_from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a node (and its subtree) from its ``to_dict()`` form.

    Args:
        data: Dictionary as produced by ``to_dict()`` or parsed from JSON

    Returns:
        The reconstructed node

    Raises:
        ValueError: If the ``type`` discriminant is missing or unknown
    """
    node_type = data.get("type")
    children = [node_from_dict(child) for child in data.get("children", [])]

    if node_type == TextRun.type:
        return TextRun(md=data["md"])
    if node_type == Image.type:
        return Image(
            src=data["src"],
            alt=data.get("alt"),
            width=data.get("width"),
            height=data.get("height"),
            align=data.get("align"),
            position=data.get("position"),
        )
    if node_type == Table.type:
        headers = data.get("headers")
        return Table(
            headers=[_cell_from_dict(cell) for cell in headers] if headers else None,
            rows=[[_cell_from_dict(cell) for cell in row] for row in data.get("rows", [])],
        )
    if node_type == ListItem.type:
        return ListItem(label=data.get("label"), id=data.get("id"), children=children)
    if node_type == ListNode.type:
        return ListNode(
            kind=ListKind(data["kind"]),
            style=ListStyle(data["style"]),
            symbol=data.get("symbol"),
            children=children,
        )
    if node_type == Paragraph.type:
        return Paragraph(label=data.get("label"), id=data.get("id"), children=children)
    if node_type == Article.type:
        return Article(
            id=data["id"],
            label=data["label"],
            title=data.get("title"),
            doknr=data.get("doknr"),
            footnotes=_footnotes_from_dict(data),
            children=children,
        )
    if node_type == Section.type:
        return Section(
            label=data.get("label"),
            title=data.get("title"),
            doknr=data.get("doknr"),
            footnotes=_footnotes_from_dict(data),
            children=children,
        )
    if node_type == Outline.type:
        return Outline(
            id=data["id"], label=data["label"], title=data.get("title"), children=children
        )
    if node_type == Document.type:
        return Document(
            abbreviation=data.get("abbreviation"),
            title=data.get("title"),
            children=children,
        )

    raise ValueError(f"Unknown node type: {node_type!r}")
