"""Registry-based inline rendering for GII XML."""

from lawtree.parsers.registry.engine import InlineRenderer
from lawtree.parsers.registry.protocols import (
    ElementHandler,
    ParseResult,
)
from lawtree.parsers.registry.registry import ElementRegistry

__all__ = [
    "ElementHandler",
    "ElementRegistry",
    "InlineRenderer",
    "ParseResult",
]
