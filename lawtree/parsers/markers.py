"""List marker classification.

A definition list's kind and style are derived from the text of its first
term (``DT``). The DTD's ``Type`` attribute is advisory and not consulted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lawtree.models import ListKind, ListStyle

# Ordered marker patterns, checked in priority order
_ORDERED_PATTERNS: list[tuple[re.Pattern[str], ListStyle]] = [
    (re.compile(r"^\(?\d+\)?[.)]?$"), ListStyle.ARABIC),
    (re.compile(r"^[a-z]\)$"), ListStyle.ALPHA_LOWER),
    (re.compile(r"^[A-Z]\)$"), ListStyle.ALPHA_UPPER),
    (re.compile(r"^[ivxlcdm]+\)$"), ListStyle.ROMAN_LOWER),
    (re.compile(r"^[IVXLCDM]+\)$"), ListStyle.ROMAN_UPPER),
]

BULLET_MARKERS = {"•"}
DASH_MARKERS = {"-", "–", "—"}  # hyphen, en dash, em dash

# First run of letters/digits (unicode aware, no underscore)
_TOKEN_PATTERN = re.compile(r"[^\W_]+")


@dataclass(frozen=True)
class MarkerClass:
    """Classification of a list marker."""

    kind: ListKind
    style: ListStyle
    symbol: str | None = None


def classify_marker(raw: str) -> MarkerClass:
    """Classify a list marker into kind and style.

    Args:
        raw: Marker text such as "1.", "a)", "IV)", "•" or "–"

    Returns:
        MarkerClass; custom unordered markers carry the literal marker
        as symbol
    """
    marker = raw.strip()

    for pattern, style in _ORDERED_PATTERNS:
        if pattern.match(marker):
            return MarkerClass(kind=ListKind.ORDERED, style=style)

    if marker in BULLET_MARKERS:
        return MarkerClass(kind=ListKind.UNORDERED, style=ListStyle.BULLET)
    if marker in DASH_MARKERS:
        return MarkerClass(kind=ListKind.UNORDERED, style=ListStyle.DASH)

    return MarkerClass(kind=ListKind.UNORDERED, style=ListStyle.CUSTOM, symbol=marker)


def marker_token(raw: str | None) -> str | None:
    """Extract the id token of a marker.

    Examples:
        "3." -> "3", "b)" -> "b", "(2)" -> "2", "IV)" -> "IV", "•" -> None
    """
    if not raw:
        return None
    match = _TOKEN_PATTERN.search(raw)
    return match.group(0) if match else None
