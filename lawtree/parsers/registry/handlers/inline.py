"""Inline element handlers for text-level elements.

These handlers render elements that appear inline within text, such as
emphasis (B, I), the small HTML subset (U, SUP, SUB, SMALL), line breaks
(BR) and footnote references (FnR).
"""

from __future__ import annotations

from dataclasses import dataclass

from lawtree.parsers.registry.protocols import (
    ParseResult,
    RecurseFn,
    render_children,
)
from lawtree.parsers.xml_nodes import XmlNode, get_attr


@dataclass
class WrapHandler:
    """Handler that wraps the rendered children in fixed delimiters.

    Used for markdown emphasis (``**``/``*``) and for the HTML subset
    (``<u>``, ``<sup>``, ``<sub>``, ``<small>``).
    """

    prefix: str
    suffix: str

    @classmethod
    def html(cls, tag: str) -> WrapHandler:
        """Create a handler wrapping content in an HTML tag."""
        return cls(prefix=f"<{tag}>", suffix=f"</{tag}>")

    def handle(self, node: XmlNode, recurse: RecurseFn) -> ParseResult:
        content = render_children(node, recurse)
        if not content.strip():
            return ParseResult(text=content)
        return ParseResult(text=f"{self.prefix}{content}{self.suffix}")


@dataclass
class LineBreakHandler:
    """Handler for <BR> elements.

    Emits a literal HTML line break marker.
    """

    def handle(self, node: XmlNode, recurse: RecurseFn) -> ParseResult:
        return ParseResult(text="<br />")


@dataclass
class FootnoteRefHandler:
    """Handler for <FnR> (footnote reference) elements.

    Emits a markdown footnote marker ``[^id]`` keyed by the ID attribute.
    Falls back to the rendered content when the element has no ID.
    """

    def handle(self, node: XmlNode, recurse: RecurseFn) -> ParseResult:
        ref_id = get_attr(node, "id").strip() or render_children(node, recurse).strip()
        if not ref_id:
            return ParseResult(text="")
        return ParseResult(text=f"[^{ref_id}]")


@dataclass
class PassthroughHandler:
    """Handler that renders the children of an element unchanged.

    Used for NOINDEX and as the fallback for unknown tags.
    """

    def handle(self, node: XmlNode, recurse: RecurseFn) -> ParseResult:
        return ParseResult(text=render_children(node, recurse))

