"""Plain text extraction from text, Markdown, PDF, Word, Excel and CSV documents."""

from doctext.config import ExtractorConfig, FetchConfig
from doctext.detector import MimeResolver, normalize_mime_type, resolve_mime_type
from doctext.exceptions import (
    DecodingError,
    DocTextError,
    ExtractionError,
    FetchError,
    UnknownMimeTypeError,
    UnsupportedTypeError,
)
from doctext.extractor import DocumentKind, TextExtractor, kind_for_mime
from doctext.fetcher import DocumentFetcher, read_file
from doctext.handler import DocumentHandler
from doctext.logger import setup_logging
from doctext.models import FetchedDocument
from doctext.parser import from_buffer, from_file, from_url

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "from_buffer",
    "from_file",
    "from_url",
    # Core classes
    "DocumentHandler",
    "TextExtractor",
    "DocumentFetcher",
    "MimeResolver",
    "DocumentKind",
    # Functions
    "kind_for_mime",
    "resolve_mime_type",
    "normalize_mime_type",
    "read_file",
    "setup_logging",
    # Data models
    "FetchedDocument",
    # Configuration
    "ExtractorConfig",
    "FetchConfig",
    # Exceptions
    "DocTextError",
    "UnsupportedTypeError",
    "ExtractionError",
    "DecodingError",
    "FetchError",
    "UnknownMimeTypeError",
]
