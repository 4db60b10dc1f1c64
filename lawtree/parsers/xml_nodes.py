"""Order-preserving XML ingestion.

The input is parsed once with lxml and converted into ``XmlNode`` objects:
an explicit tagged shape (tag name, attributes, ordered children, text) that
the rest of the converter matches on. Element text and tail text become text
nodes between the element children, so mixed content keeps document order.

The lookup helpers never raise; missing nodes, attributes or text are
returned as ``None``, empty lists or empty strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from lxml import etree


class XmlParseError(ValueError):
    """Raised when the input is not well-formed XML."""


@dataclass
class XmlNode:
    """A generic XML node.

    Element nodes have a lower-cased, namespace-stripped ``tag``; text nodes
    have ``tag=None`` and carry their content in ``text``.
    """

    tag: str | None
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[XmlNode] = field(default_factory=list)
    text: str = ""

    def __iter__(self) -> Iterator[XmlNode]:
        return iter(self.children)


def local_name(raw: str) -> str:
    """Get a tag name without namespace, lower-cased.

    Handles both Clark notation (``{ns}tag``) and prefixed names (``ns:tag``).

    Args:
        raw: Raw tag name

    Returns:
        Lower-cased local name (e.g., "enbez" for "{ns}EnBez")
    """
    if "}" in raw:
        raw = raw.split("}")[-1]
    if ":" in raw:
        raw = raw.split(":")[-1]
    return raw.lower()


def _text_node(text: str) -> XmlNode:
    return XmlNode(tag=None, text=text)


def _from_element(elem: etree._Element) -> XmlNode:
    node = XmlNode(
        tag=local_name(elem.tag),
        attrs={str(key).split("}")[-1]: value for key, value in elem.attrib.items()},
    )

    if elem.text:
        node.children.append(_text_node(elem.text))

    for child in elem:
        # Comments and processing instructions have a non-string tag
        if isinstance(child.tag, str):
            node.children.append(_from_element(child))
        if child.tail:
            node.children.append(_text_node(child.tail))

    return node


def parse_xml(xml: bytes | str) -> XmlNode:
    """Parse an XML document into an ``XmlNode`` tree.

    Args:
        xml: The complete XML document

    Returns:
        The root element as XmlNode

    Raises:
        XmlParseError: If the input is not well-formed XML
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")

    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        huge_tree=True,
    )
    try:
        root = etree.fromstring(xml, parser=parser)
    except etree.XMLSyntaxError as e:
        raise XmlParseError(f"Malformed XML: {e}") from e

    if root is None:
        raise XmlParseError("Malformed XML: empty document")

    return _from_element(root)


def is_text(node: XmlNode) -> bool:
    """Check if the node is a text node."""
    return node.tag is None


def first_child(node: XmlNode | None, name: str) -> XmlNode | None:
    """Find the first direct child element with the given tag name."""
    if node is None:
        return None
    target = name.lower()
    for child in node.children:
        if child.tag == target:
            return child
    return None


def all_children(node: XmlNode | None, name: str) -> list[XmlNode]:
    """Find all direct child elements with the given tag name."""
    if node is None:
        return []
    target = name.lower()
    return [child for child in node.children if child.tag == target]


def all_descendants(node: XmlNode | None, name: str) -> list[XmlNode]:
    """Find all elements with the given tag name, in document order.

    The node itself is included when it matches.
    """
    if node is None:
        return []
    target = name.lower()
    found: list[XmlNode] = []

    def walk(current: XmlNode) -> None:
        if current.tag == target:
            found.append(current)
        for child in current.children:
            walk(child)

    walk(node)
    return found


def get_attr(node: XmlNode | None, name: str, default: str = "") -> str:
    """Get an attribute value, ignoring the case of the attribute name.

    ``get_attr(node, "id")`` resolves ``ID``, ``Id`` and ``id``.
    """
    if node is None:
        return default
    if name in node.attrs:
        return node.attrs[name]
    target = name.lower()
    for key, value in node.attrs.items():
        if key.lower() == target:
            return value
    return default


def text_deep(node: XmlNode | None) -> str:
    """Concatenate all descendant text of a node, stripped."""
    if node is None:
        return ""
    parts: list[str] = []

    def walk(current: XmlNode) -> None:
        if current.tag is None:
            parts.append(current.text)
            return
        for child in current.children:
            walk(child)

    walk(node)
    return "".join(parts).strip()
