"""Protocol definitions for the inline element registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from lawtree.parsers.xml_nodes import XmlNode


@dataclass
class ParseResult:
    """Result from rendering an element."""

    text: str
    """The rendered inline text."""


# Type alias for recursive processing function
RecurseFn = Callable[["XmlNode"], ParseResult]


def render_children(node: XmlNode, recurse: RecurseFn) -> str:
    """Render the children of a node in document order.

    Text nodes contribute their text verbatim; elements are rendered through
    ``recurse``. Whitespace is preserved so that runs concatenate correctly.

    Args:
        node: The node whose children are rendered
        recurse: Function to call for recursive child processing

    Returns:
        Rendered text of all children
    """
    parts: list[str] = []

    for child in node.children:
        if child.tag is None:
            parts.append(child.text)
            continue

        result = recurse(child)
        if result.text:
            parts.append(result.text)

    return "".join(parts)


class ElementHandler(Protocol):
    """Protocol for inline element handlers.

    Handlers render a specific kind of XML element into inline text. They
    receive a ``recurse`` function to render child elements.
    """

    def handle(self, node: XmlNode, recurse: RecurseFn) -> ParseResult:
        """Render the element.

        Args:
            node: The XML node to render
            recurse: Function to call for recursive child processing

        Returns:
            ParseResult containing the rendered text
        """
        ...
