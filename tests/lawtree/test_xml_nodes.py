"""Tests for XML ingestion and node helpers."""

import pytest

from lawtree.parsers.xml_nodes import (
    XmlParseError,
    all_children,
    all_descendants,
    first_child,
    get_attr,
    is_text,
    local_name,
    parse_xml,
    text_deep,
)


class TestLocalName:
    """Tests for local_name function."""

    def test_plain_tag_lowercased(self) -> None:
        assert local_name("EnBez") == "enbez"

    def test_clark_notation(self) -> None:
        assert local_name("{http://example.com/ns}Content") == "content"

    def test_prefixed_name(self) -> None:
        assert local_name("gii:norm") == "norm"


class TestParseXml:
    """Tests for parse_xml function."""

    def test_tags_are_lowercased(self) -> None:
        """Element tag names are normalized to lower case."""
        root = parse_xml("<Content><P>Text</P></Content>")
        assert root.tag == "content"
        assert root.children[0].tag == "p"

    def test_mixed_content_keeps_order(self) -> None:
        """Text, elements and tails appear in document order."""
        root = parse_xml("<P>vor <B>fett</B> nach</P>")

        assert [child.tag for child in root.children] == [None, "b", None]
        assert root.children[0].text == "vor "
        assert root.children[2].text == " nach"

    def test_namespaces_are_stripped(self) -> None:
        """Namespaced documents are matched by local name."""
        root = parse_xml('<d:dokumente xmlns:d="urn:gii"><d:norm/></d:dokumente>')
        assert root.tag == "dokumente"
        assert root.children[0].tag == "norm"

    def test_attributes_keep_their_name(self) -> None:
        """Attribute names are kept; lookup is case-insensitive."""
        root = parse_xml('<FnR ID="F1"/>')
        assert root.attrs == {"ID": "F1"}

    def test_comments_dropped_tail_kept(self) -> None:
        """Comments disappear without losing the text after them."""
        root = parse_xml("<P>eins<!-- Kommentar --> zwei</P>")
        assert text_deep(root) == "eins zwei"

    def test_processing_instruction_tail_kept(self) -> None:
        """Processing instructions are dropped but their tail text survives."""
        root = parse_xml("<P>eins<?page 3?> zwei</P>")
        assert text_deep(root) == "eins zwei"

    def test_accepts_bytes_with_declaration(self) -> None:
        """Byte input with an XML declaration is parsed."""
        root = parse_xml('<?xml version="1.0" encoding="UTF-8"?><norm>§ 1</norm>'.encode("utf-8"))
        assert text_deep(root) == "§ 1"

    def test_accepts_str_with_declaration(self) -> None:
        """String input with an encoding declaration is parsed."""
        root = parse_xml('<?xml version="1.0" encoding="UTF-8"?><norm>Grün</norm>')
        assert text_deep(root) == "Grün"

    def test_malformed_xml_raises(self) -> None:
        """Unparsable markup raises XmlParseError."""
        with pytest.raises(XmlParseError, match="Malformed XML"):
            parse_xml("<norm><P>offen</norm>")

    def test_parse_error_is_value_error(self) -> None:
        """XmlParseError can be handled as ValueError."""
        with pytest.raises(ValueError):
            parse_xml("")


class TestHelpers:
    """Tests for node lookup helpers."""

    def test_is_text(self) -> None:
        root = parse_xml("<P>Text<B/></P>")
        assert is_text(root.children[0])
        assert not is_text(root.children[1])

    def test_first_child(self) -> None:
        root = parse_xml("<metadaten><enbez>§ 1</enbez><enbez>§ 2</enbez></metadaten>")
        assert text_deep(first_child(root, "enbez")) == "§ 1"

    def test_first_child_missing(self) -> None:
        root = parse_xml("<metadaten/>")
        assert first_child(root, "enbez") is None

    def test_first_child_of_none(self) -> None:
        assert first_child(None, "enbez") is None

    def test_first_child_is_case_insensitive(self) -> None:
        root = parse_xml("<textdaten><Content/></textdaten>")
        assert first_child(root, "Content") is not None

    def test_all_children_direct_only(self) -> None:
        root = parse_xml("<DL><DT>1.</DT><DD><DT>x</DT></DD><DT>2.</DT></DL>")
        assert len(all_children(root, "dt")) == 2

    def test_all_descendants_in_document_order(self) -> None:
        root = parse_xml('<norm><a><Footnote ID="1"/></a><Footnote ID="2"/></norm>')
        found = all_descendants(root, "footnote")
        assert [get_attr(node, "id") for node in found] == ["1", "2"]

    def test_all_descendants_includes_self(self) -> None:
        root = parse_xml("<norm/>")
        assert all_descendants(root, "norm") == [root]

    def test_get_attr_case_insensitive(self) -> None:
        root = parse_xml('<IMG SRC="bild.png" Width="10"/>')
        assert get_attr(root, "src") == "bild.png"
        assert get_attr(root, "width") == "10"

    def test_get_attr_default(self) -> None:
        root = parse_xml("<IMG/>")
        assert get_attr(root, "src") == ""
        assert get_attr(root, "src", "none") == "none"
        assert get_attr(None, "src") == ""

    def test_text_deep_concatenates_and_strips(self) -> None:
        root = parse_xml("<titel>  Ziele <B>des</B> Naturschutzes \n</titel>")
        assert text_deep(root) == "Ziele des Naturschutzes"

    def test_text_deep_of_none(self) -> None:
        assert text_deep(None) == ""
