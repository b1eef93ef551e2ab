"""High-level API for text extraction."""

from os import PathLike
from typing import Optional, Union

from doctext.config import ExtractorConfig
from doctext.handler import DocumentHandler


def from_buffer(
    data: bytes, mime_type: str, config: Optional[ExtractorConfig] = None
) -> str:
    """Extract text from raw document bytes.

    Examples:
        >>> from_buffer(b"# Hi", "text/markdown")
        '<h1>Hi</h1>\\n'
    """
    return DocumentHandler(config=config).from_buffer(data, mime_type)


def from_file(
    path: Union[str, PathLike], config: Optional[ExtractorConfig] = None
) -> Optional[str]:
    """Extract text from a local file, or None if its type is unrecognized.

    Examples:
        >>> text = from_file("report.xlsx")
    """
    return DocumentHandler(config=config).from_file(path)


def from_url(url: str, config: Optional[ExtractorConfig] = None) -> str:
    """Download a document over HTTP(S) and extract its text.

    Examples:
        >>> from doctext import FetchConfig
        >>> # Bound the wait on slow servers
        >>> config = ExtractorConfig(fetch=FetchConfig(timeout=30.0))
        >>> text = from_url("https://example.com/report.pdf", config=config)
    """
    return DocumentHandler(config=config).from_url(url)
