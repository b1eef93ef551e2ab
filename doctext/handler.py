"""Entry operations composing MIME resolution, byte acquisition and extraction."""

from os import PathLike
from typing import Optional, Union

from doctext.config import ExtractorConfig
from doctext.detector import MimeResolver
from doctext.extractor import TextExtractor
from doctext.fetcher import DocumentFetcher, read_file
from doctext.logger import Timer, get_logger, operation

logger = get_logger(__name__)


class DocumentHandler:
    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        fetcher: Optional[DocumentFetcher] = None,
        resolver: Optional[MimeResolver] = None,
        config: Optional[ExtractorConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            extractor: Format dispatcher. If None, creates default with config.
            fetcher: Remote acquirer. If None, creates default with config.fetch.
            resolver: MIME resolver for file paths and URLs.
            config: Extraction configuration. Only used for components created here.
        """
        self.config = config or ExtractorConfig()
        self.resolver = resolver or MimeResolver()
        self.extractor = extractor or TextExtractor(config=self.config)
        self.fetcher = fetcher or DocumentFetcher(
            config=self.config.fetch, resolver=self.resolver
        )

    def from_buffer(self, data: bytes, mime_type: str) -> str:
        """Extract text from bytes of the given MIME type.

        Raises:
            UnsupportedTypeError: If the MIME type is not supported
            DecodingError: If text or Markdown input is not valid UTF-8
            ExtractionError: If a decoder fails
        """
        with operation():
            return self.extractor.extract(data, mime_type)

    def from_file(self, path: Union[str, PathLike]) -> Optional[str]:
        """Extract text from a local file.

        Returns None, without reading the file, when the extension does not
        map to a MIME type.

        Raises:
            OSError: If the file cannot be read
            UnsupportedTypeError: If the resolved MIME type is not supported
            DecodingError: If text or Markdown input is not valid UTF-8
            ExtractionError: If a decoder fails
        """
        with operation():
            mime_type = self.resolver.resolve(str(path))
            if not mime_type:
                logger.warning("Unsupported filetype", extra_data={"path": str(path)})
                return None

            data = read_file(path)
            return self.extractor.extract(data, mime_type)

    def from_url(self, url: str) -> str:
        """Download a document and extract its text.

        Raises:
            FetchError: If the request fails or the status is not 200
            UnknownMimeTypeError: If the MIME type cannot be determined
            UnsupportedTypeError: If the MIME type is not supported
            DecodingError: If text or Markdown input is not valid UTF-8
            ExtractionError: If a decoder fails
        """
        with operation(), Timer("from_url") as timer:
            document = self.fetcher.fetch(url)
            text = self.extractor.extract(document.content, document.mime_type)

            logger.debug(
                "Extracted text from URL",
                extra_data={
                    "url": url,
                    "mime_type": document.mime_type,
                    "total_time_ms": timer.get_elapsed_ms(),
                },
            )
        return text
