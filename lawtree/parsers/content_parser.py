"""Parser for the content blocks of a norm (paragraphs, lists, tables, images).

The parsers in this module are mutually recursive: a paragraph may contain a
list, whose items may contain paragraphs, lists and tables again. All of them
share the signature ``(node, id_prefix)`` and are dispatched by tag name
through ``parse_content``.

Hierarchical ids are derived from the id prefix handed down by the caller
and a local token (paragraph number, list marker, item position), e.g.
"14.2.b" for § 14, paragraph (2), item b).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from lawtree.models import (
    ContentNode,
    Image,
    ListItem,
    ListKind,
    ListNode,
    ListStyle,
    Paragraph,
    Table,
    TableCell,
    TextRun,
)
from lawtree.parsers.inline import render_inline
from lawtree.parsers.markers import MarkerClass, classify_marker, marker_token
from lawtree.parsers.xml_nodes import XmlNode, all_children, get_attr

# Leading paragraph number, e.g. "(3) Die Behörde ..."
PARAGRAPH_NUMBER = re.compile(r"^\s*\((\d+)\)\s*")

# Tags that interrupt running text and are parsed into their own node
NESTED_CONTENT_TAGS = {"p", "dl", "table", "img"}

# Table sections containing rows
TABLE_SECTIONS = {"thead", "tbody", "tfoot"}


class _MixedContent:
    """Accumulates mixed content: text runs interleaved with nested nodes."""

    def __init__(self) -> None:
        self.children: list[ContentNode] = []
        self._text: list[str] = []

    def add_text(self, text: str) -> None:
        self._text.append(text)

    def add_node(self, node: ContentNode | None) -> None:
        self.flush()
        if node is not None:
            self.children.append(node)

    def flush(self) -> None:
        md = "".join(self._text).strip()
        if md:
            self.children.append(TextRun(md=md))
        self._text = []

    def has_nested(self) -> bool:
        return any(not isinstance(child, TextRun) for child in self.children)


def _join_id(prefix: str, token: str) -> str:
    return f"{prefix}.{token}" if prefix else token


def _leading_number(node: XmlNode) -> str | None:
    """Find a "(n)" numbering at the start of the first text run."""
    parts: list[str] = []
    for child in node.children:
        if child.tag in NESTED_CONTENT_TAGS:
            break
        parts.append(render_inline([child]))

    match = PARAGRAPH_NUMBER.match("".join(parts))
    return match.group(1) if match else None


def parse_paragraph(node: XmlNode, id_prefix: str = "") -> Paragraph | None:
    """Parse a <P> element into a Paragraph.

    A leading "(n)" becomes the paragraph label and extends the id prefix;
    the marker is removed from the first text run. Paragraphs without
    numbering get neither label nor id.

    Args:
        node: The <P> element
        id_prefix: Hierarchical id of the enclosing provision or item

    Returns:
        Paragraph, or None when the element has no content at all
    """
    number = _leading_number(node)
    paragraph_id = _join_id(id_prefix, number) if number else None
    nested_prefix = paragraph_id or id_prefix

    content = _MixedContent()
    for child in node.children:
        if child.tag in NESTED_CONTENT_TAGS:
            content.add_node(parse_content(child, nested_prefix))
        else:
            content.add_text(render_inline([child]))
    content.flush()

    children = content.children
    if number and children and isinstance(children[0], TextRun):
        rest = PARAGRAPH_NUMBER.sub("", children[0].md, count=1).strip()
        if rest:
            children[0] = TextRun(md=rest)
        else:
            # Marker directly followed by a nested list
            del children[0]

    if not number and not children:
        return None

    return Paragraph(
        label=f"({number})" if number else None,
        id=paragraph_id,
        children=children,
    )


@dataclass
class _ListBuilder:
    """State of a definition list while its DT/DD children are walked."""

    id_prefix: str
    items: list[ListItem] = field(default_factory=list)
    marker_class: MarkerClass | None = None
    marker: str | None = None
    item_id: str | None = None
    content: _MixedContent | None = None

    @property
    def kind(self) -> ListKind:
        return self.marker_class.kind if self.marker_class else ListKind.UNORDERED

    def start_item(self, marker: str) -> None:
        """Begin a new item for a <DT> term."""
        self.finish_item()
        # Only the first marker of a list decides its kind and style
        if self.marker_class is None and not self.items:
            self.marker_class = classify_marker(marker)
        self.marker = marker
        self._open_item()

    def add_definition(self, node: XmlNode) -> None:
        """Add a <DD> or <LA> definition to the current item."""
        if self.content is None:
            self.marker = None
            self._open_item()
        self._walk(node)
        self.content.flush()

    def finish_item(self) -> None:
        """Emit the current item, if any."""
        if self.content is None:
            return
        self.content.flush()

        if self.kind is ListKind.ORDERED:
            label = self.marker or f"{len(self.items) + 1}."
        else:
            label = None

        self.items.append(
            ListItem(label=label, id=self.item_id, children=self.content.children)
        )
        self.content = None
        self.marker = None
        self.item_id = None

    def build(self) -> ListNode:
        self.finish_item()
        marker_class = self.marker_class or MarkerClass(
            kind=ListKind.UNORDERED, style=ListStyle.CUSTOM
        )
        symbol = None
        if marker_class.kind is ListKind.UNORDERED and marker_class.style is ListStyle.CUSTOM:
            symbol = marker_class.symbol or None

        return ListNode(
            kind=marker_class.kind,
            style=marker_class.style,
            symbol=symbol,
            children=self.items,
        )

    def _open_item(self) -> None:
        self.content = _MixedContent()
        if self.id_prefix:
            position = len(self.items) + 1
            token = marker_token(self.marker) or str(position)
            self.item_id = _join_id(self.id_prefix, token)
        else:
            self.item_id = None

    def _walk(self, node: XmlNode) -> None:
        nested_prefix = self.item_id or self.id_prefix
        for part in node.children:
            if part.tag == "la":
                # LA inside DD only wraps the item text
                self._walk(part)
            elif part.tag in NESTED_CONTENT_TAGS:
                self.content.add_node(parse_content(part, nested_prefix))
            else:
                self.content.add_text(render_inline([part]))


def parse_list(node: XmlNode, id_prefix: str = "") -> ListNode:
    """Parse a <DL> definition list into a ListNode.

    Terms (<DT>) hold the item markers, definitions (<DD>, <LA>) the item
    content. Consecutive definitions without a new term extend the same item.

    Args:
        node: The <DL> element
        id_prefix: Hierarchical id of the enclosing paragraph or item

    Returns:
        ListNode; items of unordered lists carry no label
    """
    builder = _ListBuilder(id_prefix=id_prefix)

    for child in node.children:
        if child.tag == "dt":
            builder.start_item(render_inline(child.children).strip())
        elif child.tag in ("dd", "la"):
            builder.add_definition(child)

    return builder.build()


def _column_index(group: XmlNode) -> dict[str, int]:
    """Map column names (colspec/@colname) to their position."""
    columns: dict[str, int] = {}
    for index, colspec in enumerate(all_children(group, "colspec")):
        name = get_attr(colspec, "colname").strip()
        if name and name not in columns:
            columns[name] = index
    return columns


def _colspan(entry: XmlNode, columns: dict[str, int]) -> int | None:
    """Compute the column span from the namest/nameend attributes."""
    start = get_attr(entry, "namest").strip()
    end = get_attr(entry, "nameend").strip()
    if start not in columns or end not in columns:
        return None

    span = columns[end] - columns[start] + 1
    return span if span > 1 else None


def _parse_cell(entry: XmlNode, columns: dict[str, int]) -> TableCell:
    content = _MixedContent()
    for child in entry.children:
        if child.tag in NESTED_CONTENT_TAGS:
            content.add_node(parse_content(child))
        else:
            content.add_text(render_inline([child]))
    content.flush()

    colspan = _colspan(entry, columns)
    if content.has_nested():
        return TableCell(content="", colspan=colspan, children=content.children)

    text = content.children[0].md if content.children else ""
    return TableCell(content=text, colspan=colspan)


def _parse_row(row: XmlNode, columns: dict[str, int]) -> list[TableCell]:
    return [_parse_cell(entry, columns) for entry in all_children(row, "entry")]


def _parse_rows(section: XmlNode, columns: dict[str, int]) -> list[list[TableCell]]:
    return [_parse_row(row, columns) for row in all_children(section, "row")]


def parse_table(node: XmlNode, id_prefix: str = "") -> Table:
    """Parse a CALS <table> element into a Table.

    The first row of the first <thead> becomes the header; all other rows are
    body rows in document order. Tables carry no hierarchical id; the
    ``id_prefix`` parameter only keeps the parser signature uniform.

    Args:
        node: The <table> element
        id_prefix: Unused

    Returns:
        Table with headers (if any) and rows
    """
    headers: list[TableCell] | None = None
    rows: list[list[TableCell]] = []

    groups = all_children(node, "tgroup") or [node]
    for group in groups:
        columns = _column_index(group)

        for child in group.children:
            if child.tag == "row":
                rows.append(_parse_row(child, columns))
            elif child.tag == "thead":
                head_rows = _parse_rows(child, columns)
                if head_rows and headers is None:
                    first_row = head_rows.pop(0)
                    if first_row:
                        headers = first_row
                rows.extend(head_rows)
            elif child.tag in TABLE_SECTIONS:
                rows.extend(_parse_rows(child, columns))

    return Table(headers=headers, rows=rows)


def _int_attr(node: XmlNode, name: str) -> int | None:
    value = get_attr(node, name).strip()
    try:
        return int(value)
    except ValueError:
        return None


def parse_image(node: XmlNode, id_prefix: str = "") -> Image | None:
    """Parse an <IMG> element into an Image.

    Args:
        node: The <IMG> element
        id_prefix: Unused

    Returns:
        Image, or None when the element has no source
    """
    src = get_attr(node, "src").strip()
    if not src:
        return None

    align = get_attr(node, "align").strip().lower()
    position = get_attr(node, "pos").strip().lower() or get_attr(node, "position").strip().lower()

    return Image(
        src=src,
        alt=get_attr(node, "alt").strip() or None,
        width=_int_attr(node, "width"),
        height=_int_attr(node, "height"),
        align=align or None,
        position=position or None,
    )


ContentParser = Callable[[XmlNode, str], "ContentNode | None"]

# Dispatch table for content elements
CONTENT_PARSERS: dict[str, ContentParser] = {
    "p": parse_paragraph,
    "dl": parse_list,
    "table": parse_table,
    "img": parse_image,
}


def parse_content(node: XmlNode, id_prefix: str = "") -> ContentNode | None:
    """Parse a content element by dispatching on its tag name.

    Args:
        node: A child of a <Content> block, definition or paragraph
        id_prefix: Hierarchical id context for nested elements

    Returns:
        The parsed node, or None for text nodes and unknown tags
    """
    parser = CONTENT_PARSERS.get(node.tag or "")
    if parser is None:
        return None
    return parser(node, id_prefix)
