"""Download statutes from gesetze-im-internet.de."""

import io
import zipfile

import requests

from lawtree.config import GII_BASE_URL, HTTP_TIMEOUT, validate_slug


def download_url(slug: str) -> str:
    """Build the download URL of a statute's XML archive."""
    return f"{GII_BASE_URL}/{slug}/xml.zip"


def extract_xml(archive: bytes) -> bytes:
    """Extract the XML member of a downloaded archive.

    Args:
        archive: ZIP archive contents

    Returns:
        Bytes of the first .xml member

    Raises:
        ValueError: If the archive is invalid or holds no XML file
    """
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            names = [name for name in zf.namelist() if name.lower().endswith(".xml")]
            if not names:
                raise ValueError("Archive contains no XML file")
            return zf.read(names[0])
    except zipfile.BadZipFile as e:
        raise ValueError(f"Invalid archive: {e}") from e


def download_law(slug: str) -> bytes:
    """Download the XML of a statute.

    Args:
        slug: Statute slug as used in the URL (e.g., "bnatschg_2009")

    Returns:
        The statute XML

    Raises:
        ValueError: If the slug is invalid or the archive holds no XML
        requests.HTTPError: If download fails
    """
    validate_slug(slug)

    url = download_url(slug)
    response = requests.get(url, timeout=HTTP_TIMEOUT, allow_redirects=True)
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise requests.HTTPError(f"Failed to download {slug}: {e}") from e

    return extract_xml(response.content)
