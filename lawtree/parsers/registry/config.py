"""Registry configuration for inline rendering of GII XML."""

from lawtree.parsers.registry.engine import InlineRenderer
from lawtree.parsers.registry.handlers.inline import (
    FootnoteRefHandler,
    LineBreakHandler,
    PassthroughHandler,
    WrapHandler,
)
from lawtree.parsers.registry.registry import ElementRegistry

# Tags rendered as HTML because markdown has no equivalent
HTML_TAGS = ("u", "sup", "sub", "small")

FOOTNOTE_TAGS = ("footnotes", "footnote")


def create_inline_registry() -> ElementRegistry:
    """Create registry configured for inline rendering.

    Returns:
        ElementRegistry with all inline handlers registered
    """
    registry = ElementRegistry()

    # Markdown emphasis
    registry.register("b", WrapHandler(prefix="**", suffix="**"))
    registry.register("i", WrapHandler(prefix="*", suffix="*"))

    # Minimal HTML subset
    for tag in HTML_TAGS:
        registry.register(tag, WrapHandler.html(tag))

    # Markers
    registry.register("br", LineBreakHandler())
    registry.register("fnr", FootnoteRefHandler())

    # Containers that only contribute their content
    registry.register("noindex", PassthroughHandler())

    # Footnote definitions are collected per norm, not rendered inline
    registry.skip(*FOOTNOTE_TAGS)

    return registry


def create_inline_renderer() -> InlineRenderer:
    """Create an InlineRenderer configured for GII inline markup.

    Returns:
        InlineRenderer with inline registry and passthrough fallback
    """
    return InlineRenderer(create_inline_registry())
