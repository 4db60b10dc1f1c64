"""Shared test fixtures for lawtree tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from lawtree.parsers.xml_nodes import XmlNode, parse_xml

# Shared fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

SAMPLE_STATUTE = FIXTURES_DIR / "BJNR254210009.xml"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sample_statute_path() -> Path:
    """Return the path to the sample statute (BNatSchG excerpt)."""
    return SAMPLE_STATUTE


@pytest.fixture
def sample_statute_xml() -> bytes:
    """Return the raw XML of the sample statute."""
    return SAMPLE_STATUTE.read_bytes()


@pytest.fixture
def make_norm():
    """Factory fixture to build a <norm> record as XML text.

    Usage:
        def test_example(make_norm):
            xml = make_norm(enbez="§ 1", content="<P>(1) Text</P>")
    """

    def _make_norm(
        content: str = "",
        doknr: str | None = None,
        footnotes: str = "",
        **metadata: str,
    ) -> str:
        meta = "".join(f"<{tag}>{value}</{tag}>" for tag, value in metadata.items())
        doknr_attr = f' doknr="{doknr}"' if doknr else ""
        text = f'<text format="XML"><Content>{content}</Content></text>' if content else ""
        fussnoten = f"<fussnoten><Content>{footnotes}</Content></fussnoten>" if footnotes else ""
        return (
            f"<norm{doknr_attr}><metadaten>{meta}</metadaten>"
            f"<textdaten>{text}{fussnoten}</textdaten></norm>"
        )

    return _make_norm


@pytest.fixture
def make_outline():
    """Factory fixture to build an outline record as XML text."""

    def _make_outline(code: str, label: str, title: str | None = None) -> str:
        title_xml = f"<gliederungstitel>{title}</gliederungstitel>" if title else ""
        return (
            "<norm><metadaten><gliederungseinheit>"
            f"<gliederungskennzahl>{code}</gliederungskennzahl>"
            f"<gliederungsbez>{label}</gliederungsbez>{title_xml}"
            "</gliederungseinheit></metadaten></norm>"
        )

    return _make_outline


@pytest.fixture
def make_document():
    """Factory fixture to wrap records into a <dokumente> document."""

    def _make_document(*norms: str) -> str:
        return '<?xml version="1.0" encoding="UTF-8"?><dokumente>' + "".join(norms) + "</dokumente>"

    return _make_document


@pytest.fixture
def xml_node():
    """Factory fixture to parse an XML snippet into an XmlNode."""

    def _xml_node(xml: str) -> XmlNode:
        return parse_xml(xml)

    return _xml_node


@pytest.fixture
def mock_http_response():
    """Factory fixture to create mock HTTP responses.

    Usage:
        def test_example(mock_http_response):
            response = mock_http_response(b"PK...")
            # response.content == b"PK..."
            # response.raise_for_status() does nothing
    """

    def _create_response(content: bytes) -> Mock:
        response = Mock()
        response.content = content
        response.raise_for_status = Mock()
        return response

    return _create_response
