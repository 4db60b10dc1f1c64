"""Render engine that orchestrates inline rendering using the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from lawtree.parsers.registry.handlers.inline import PassthroughHandler
from lawtree.parsers.registry.protocols import ElementHandler, ParseResult
from lawtree.parsers.registry.registry import ElementRegistry

if TYPE_CHECKING:
    from lawtree.parsers.xml_nodes import XmlNode


class InlineRenderer:
    """Engine that renders inline XML into markdown using the registry.

    The engine walks the node tree and dispatches elements to their
    registered handlers. Elements without a handler are flattened through
    the fallback handler, so their content is never dropped.
    """

    def __init__(
        self,
        registry: ElementRegistry,
        fallback: ElementHandler | None = None,
    ) -> None:
        """Initialize the engine with a registry.

        Args:
            registry: The element registry to use for handler lookup
            fallback: Handler for unregistered tags (default: passthrough)
        """
        self._registry = registry
        self._fallback = fallback or PassthroughHandler()

    def render_node(self, node: XmlNode | None) -> ParseResult:
        """Render a single node recursively.

        Args:
            node: The XML node to render (or None)

        Returns:
            ParseResult containing the rendered text
        """
        if node is None:
            return ParseResult(text="")

        if node.tag is None:
            return ParseResult(text=node.text)

        if self._registry.should_skip(node.tag):
            return ParseResult(text="")

        handler = self._registry.get_handler(node) or self._fallback
        return handler.handle(node, self.render_node)

    def render(self, nodes: Iterable[XmlNode]) -> str:
        """Render a sequence of nodes in order and concatenate the result.

        Args:
            nodes: Text and element nodes

        Returns:
            Rendered inline text (not stripped)
        """
        return "".join(self.render_node(node).text for node in nodes)
