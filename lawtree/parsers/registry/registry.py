"""Element registry for mapping tag names to inline handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lawtree.parsers.registry.protocols import ElementHandler
    from lawtree.parsers.xml_nodes import XmlNode


class ElementRegistry:
    """Registry mapping element names to handlers.

    The registry allows registering handlers for specific tag names,
    as well as marking tags to be skipped entirely. Tag names are matched
    lower-cased.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._handlers: dict[str, ElementHandler] = {}
        self._skip_tags: set[str] = set()

    def register(self, tag_name: str, handler: ElementHandler) -> None:
        """Register a handler for a specific tag name.

        Args:
            tag_name: The XML tag name (without namespace)
            handler: The handler to use for this tag
        """
        self._handlers[tag_name.lower()] = handler

    def skip(self, *tag_names: str) -> None:
        """Mark tags as skip (don't render, return empty).

        Args:
            tag_names: Tag names to skip
        """
        self._skip_tags.update(name.lower() for name in tag_names)

    def get_handler(self, node: XmlNode) -> ElementHandler | None:
        """Get the handler registered for an element.

        Args:
            node: The XML node to get a handler for

        Returns:
            The handler if found, None for text nodes, skipped and
            unregistered tags
        """
        if node.tag is None or node.tag in self._skip_tags:
            return None
        return self._handlers.get(node.tag)

    def should_skip(self, tag_name: str | None) -> bool:
        """Check if a tag should be skipped.

        Args:
            tag_name: The tag name to check

        Returns:
            True if the tag should be skipped
        """
        return tag_name is not None and tag_name.lower() in self._skip_tags
