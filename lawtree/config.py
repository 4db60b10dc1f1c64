"""Shared configuration for the lawtree converter."""

import re
from pathlib import Path

# Base URL of the federal law portal (gesetze-im-internet.de)
GII_BASE_URL = "https://www.gesetze-im-internet.de"

# HTTP timeout in seconds (10s is reasonable for government APIs)
HTTP_TIMEOUT = 10

# Outline codes (gliederungskennzahl) are grouped in 3-digit chunks.
# Codes up to the root width are top-level units.
OUTLINE_ROOT_WIDTH = 3
OUTLINE_CHUNK_WIDTH = 3

# JSON schema describing the converter output
SCHEMA_PATH = Path(__file__).parent / "schema" / "v1" / "lawtree.schema.json"
SCHEMA_ID = "lawtree/v1"

# Law slug as used in gesetze-im-internet.de URLs (e.g. "bgb", "ao_1977")
SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_\-]*$")


def validate_slug(slug: str) -> None:
    """Validate a law slug.

    Args:
        slug: The law slug to validate

    Raises:
        ValueError: If the slug format is invalid
    """
    if not SLUG_PATTERN.match(slug):
        raise ValueError(
            f"Invalid law slug: '{slug}'. Expected lowercase letters, digits, "
            "'_' or '-' (e.g., bgb, ao_1977)"
        )
