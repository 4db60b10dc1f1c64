"""Inline text rendering for GII XML.

Converts runs of inline markup into markdown with a small HTML subset:
``**bold**``, ``*italic*``, ``<u>``, ``<sup>``, ``<sub>``, ``<small>``,
``<br />`` and footnote references ``[^id]``.

Uses the registry-based element handler system for dispatching to
appropriate handlers.
"""

from __future__ import annotations

from typing import Iterable

from lawtree.parsers.registry.config import create_inline_renderer
from lawtree.parsers.xml_nodes import XmlNode

__all__ = [
    "render_inline",
]

# Module-level renderer (created once, reused; handlers are stateless)
_renderer = create_inline_renderer()


def render_inline(nodes: Iterable[XmlNode]) -> str:
    """Render a sequence of inline nodes to markdown.

    Unknown tags are flattened to their rendered children. The result is
    not stripped; callers trim when they emit a text run.

    Args:
        nodes: Text and element nodes in document order

    Returns:
        Rendered inline text
    """
    return _renderer.render(nodes)
