"""MIME type resolution for file paths and URLs."""

import mimetypes
import os
import posixpath
from typing import Optional
from urllib.parse import unquote, urlparse

from doctext.logger import get_logger

logger = get_logger(__name__)


DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Checked before the platform mimetypes registry, which varies between systems
# (e.g. ".md" is unknown on older Pythons and ".csv" maps differently on Windows).
EXTENSION_MIME_TYPES = {
    ".txt": "text/plain",
    ".text": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": DOCX_MIME,
    ".xls": "application/vnd.ms-excel",
    ".xlsx": XLSX_MIME,
    ".csv": "text/csv",
}

_URL_SCHEMES = {"http", "https", "file"}


class MimeResolver:
    """Maps a path or URL extension to a MIME type."""

    def resolve(self, location: str) -> Optional[str]:
        """Return the MIME type for ``location`` or None if the extension is unknown."""
        extension = self._extension(location)
        if not extension:
            logger.debug(
                "No file extension to resolve MIME type from",
                extra_data={"location": location},
            )
            return None

        mime_type = EXTENSION_MIME_TYPES.get(extension)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type("file" + extension, strict=False)

        logger.debug(
            "Resolved MIME type from extension",
            extra_data={
                "location": location,
                "extension": extension,
                "mime_type": mime_type,
            },
        )
        return mime_type

    @staticmethod
    def normalize(value: Optional[str]) -> Optional[str]:
        """Strip parameters from a Content-Type value: "Text/CSV; charset=utf-8" -> "text/csv"."""
        if not value:
            return None
        mime_type = value.split(";", 1)[0].strip().lower()
        return mime_type or None

    @staticmethod
    def _extension(location: str) -> str:
        parsed = urlparse(location)
        if parsed.scheme.lower() in _URL_SCHEMES:
            _, extension = posixpath.splitext(unquote(parsed.path))
        else:
            _, extension = os.path.splitext(location)
        return extension.lower()


_default_resolver = MimeResolver()


def resolve_mime_type(location: str) -> Optional[str]:
    """Resolve a MIME type from a file path or URL extension."""
    return _default_resolver.resolve(location)


def normalize_mime_type(value: Optional[str]) -> Optional[str]:
    return MimeResolver.normalize(value)


ZIP_SIGNATURE = b"PK\x03\x04"  # OOXML (.docx/.xlsx) container
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"  # Legacy Office container (.doc/.xls)


def sniff_container(data: bytes) -> Optional[str]:
    """Return "zip", "ole" or None from the leading magic bytes."""
    head = data[:4]
    if head.startswith(ZIP_SIGNATURE):
        return "zip"
    if head.startswith(OLE_SIGNATURE):
        return "ole"
    return None
