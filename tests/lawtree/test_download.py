"""Tests for downloading statutes."""

import io
import zipfile
from unittest.mock import Mock, patch

import pytest
from requests.exceptions import HTTPError

from lawtree.config import GII_BASE_URL
from lawtree.parsers.download import download_law, download_url, extract_xml


def make_zip(**members: bytes) -> bytes:
    """Build an in-memory ZIP archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return buffer.getvalue()


class TestDownloadUrl:
    """Tests for download_url function."""

    def test_url(self) -> None:
        assert download_url("bnatschg_2009") == f"{GII_BASE_URL}/bnatschg_2009/xml.zip"


class TestExtractXml:
    """Tests for extract_xml function."""

    def test_returns_xml_member(self) -> None:
        archive = make_zip(**{"BJNR254210009.xml": b"<dokumente/>"})
        assert extract_xml(archive) == b"<dokumente/>"

    def test_ignores_other_members(self) -> None:
        archive = make_zip(**{"bild.jpg": b"\xff\xd8", "BJNR254210009.xml": b"<dokumente/>"})
        assert extract_xml(archive) == b"<dokumente/>"

    def test_no_xml_member(self) -> None:
        with pytest.raises(ValueError, match="no XML file"):
            extract_xml(make_zip(**{"readme.txt": b"x"}))

    def test_invalid_archive(self) -> None:
        with pytest.raises(ValueError, match="Invalid archive"):
            extract_xml(b"not a zip")


class TestDownloadLaw:
    """Tests for download_law function."""

    def test_download_constructs_correct_url(self, mock_http_response) -> None:
        """Verify correct URL construction."""
        with patch("lawtree.parsers.download.requests.get") as mock_get:
            mock_get.return_value = mock_http_response(make_zip(**{"a.xml": b"<dokumente/>"}))

            download_law("bnatschg_2009")

            mock_get.assert_called_once_with(
                f"{GII_BASE_URL}/bnatschg_2009/xml.zip",
                timeout=10,
                allow_redirects=True,
            )

    def test_returns_xml(self, mock_http_response) -> None:
        with patch("lawtree.parsers.download.requests.get") as mock_get:
            mock_get.return_value = mock_http_response(make_zip(**{"a.xml": b"<dokumente/>"}))
            assert download_law("bgb") == b"<dokumente/>"

    def test_download_raises_on_http_error(self) -> None:
        """HTTP errors propagate with context."""
        with patch("lawtree.parsers.download.requests.get") as mock_get:
            mock_response = Mock()
            mock_response.raise_for_status.side_effect = HTTPError("404 Not Found")
            mock_get.return_value = mock_response

            with pytest.raises(HTTPError, match="Failed to download unknown"):
                download_law("unknown")

    def test_invalid_slug_not_requested(self) -> None:
        """Slugs are validated before making HTTP requests."""
        with patch("lawtree.parsers.download.requests.get") as mock_get:
            with pytest.raises(ValueError, match="Invalid law slug"):
                download_law("../bgb")
            mock_get.assert_not_called()
