"""MIME-keyed dispatch to the format decoders."""

from enum import Enum
from typing import Callable, Optional

from doctext.backends import (
    CsvBackend,
    MarkdownBackend,
    PdfBackend,
    SpreadsheetBackend,
    WordBackend,
)
from doctext.config import ExtractorConfig
from doctext.detector import DOCX_MIME, XLSX_MIME, MimeResolver
from doctext.exceptions import (
    CSV_EXTRACTION_MESSAGE,
    SPREADSHEET_EXTRACTION_MESSAGE,
    WORD_EXTRACTION_MESSAGE,
    DecodingError,
    ExtractionError,
    UnsupportedTypeError,
)
from doctext.logger import Timer, get_logger

logger = get_logger(__name__)


class DocumentKind(Enum):
    PLAIN_TEXT = "plain_text"
    MARKDOWN = "markdown"
    PDF = "pdf"
    WORD = "word"
    SPREADSHEET = "spreadsheet"
    CSV = "csv"


MIME_KINDS: dict[str, DocumentKind] = {
    "text/plain": DocumentKind.PLAIN_TEXT,
    "text/markdown": DocumentKind.MARKDOWN,
    "application/pdf": DocumentKind.PDF,
    "application/msword": DocumentKind.WORD,
    DOCX_MIME: DocumentKind.WORD,
    "application/vnd.ms-excel": DocumentKind.SPREADSHEET,
    XLSX_MIME: DocumentKind.SPREADSHEET,
    "text/csv": DocumentKind.CSV,
}


def kind_for_mime(mime_type: Optional[str]) -> DocumentKind:
    """Map a MIME type to its extraction path.

    Raises:
        UnsupportedTypeError: If the MIME type has no extraction path
    """
    kind = MIME_KINDS.get(MimeResolver.normalize(mime_type) or "")
    if kind is None:
        raise UnsupportedTypeError(mime_type)
    return kind


class TextExtractor:
    """Extracts text from document bytes given their MIME type.

    Error policy differs per format: PDF, Word and CSV failures raise
    ExtractionError, while XLS/XLSX failures are returned as the error message
    text unless ``config.strict_spreadsheet_errors`` is set.
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        pdf: Optional[PdfBackend] = None,
        word: Optional[WordBackend] = None,
        spreadsheet: Optional[SpreadsheetBackend] = None,
        markdown: Optional[MarkdownBackend] = None,
        csv: Optional[CsvBackend] = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self.pdf = pdf or PdfBackend(self.config)
        self.word = word or WordBackend()
        self.spreadsheet = spreadsheet or SpreadsheetBackend()
        self.markdown = markdown or MarkdownBackend()
        self.csv = csv or CsvBackend(self.config.csv_separator)

        self._paths: dict[DocumentKind, Callable[[bytes, str], str]] = {
            DocumentKind.PLAIN_TEXT: self._extract_plain_text,
            DocumentKind.MARKDOWN: self._extract_markdown,
            DocumentKind.PDF: self._extract_pdf,
            DocumentKind.WORD: self._extract_word,
            DocumentKind.SPREADSHEET: self._extract_spreadsheet,
            DocumentKind.CSV: self._extract_csv,
        }

    def extract(self, data: bytes, mime_type: str) -> str:
        """Extract text from document bytes.

        Args:
            data: Raw document bytes
            mime_type: MIME type selecting the extraction path

        Returns:
            Extracted text (HTML for Markdown input)

        Raises:
            UnsupportedTypeError: If the MIME type is not supported
            DecodingError: If text or Markdown input is not valid UTF-8
            ExtractionError: If a decoder fails
        """
        kind = kind_for_mime(mime_type)
        mime_type = MimeResolver.normalize(mime_type)

        with Timer("extraction") as timer:
            text = self._paths[kind](data, mime_type)

        logger.info(
            "Extracted text from document",
            extra_data={
                "mime_type": mime_type,
                "kind": kind.value,
                "size_bytes": len(data),
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    @staticmethod
    def _decode_utf8(data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error(
                "Failed to decode text as UTF-8",
                extra_data={"size_bytes": len(data), "position": exc.start},
            )
            raise DecodingError("Unable to decode text (not valid UTF-8)") from exc

    def _extract_plain_text(self, data: bytes, mime_type: str) -> str:
        return self._decode_utf8(data)

    def _extract_markdown(self, data: bytes, mime_type: str) -> str:
        return self.markdown.render(self._decode_utf8(data))

    def _extract_pdf(self, data: bytes, mime_type: str) -> str:
        try:
            return self.pdf.extract(data)
        except Exception as exc:
            self._log_failure("PDF extraction failed", mime_type, exc)
            raise ExtractionError(f"Failed to extract PDF: {exc}") from exc

    def _extract_word(self, data: bytes, mime_type: str) -> str:
        try:
            return self.word.extract(data, mime_type)
        except Exception as exc:
            self._log_failure("DOC/DOCX extraction failed", mime_type, exc)
            raise ExtractionError(WORD_EXTRACTION_MESSAGE) from exc

    def _extract_spreadsheet(self, data: bytes, mime_type: str) -> str:
        try:
            return self.spreadsheet.extract(data, mime_type)
        except Exception as exc:
            self._log_failure("XLS/XLSX extraction failed", mime_type, exc)
            if self.config.strict_spreadsheet_errors:
                raise ExtractionError(SPREADSHEET_EXTRACTION_MESSAGE) from exc
            return SPREADSHEET_EXTRACTION_MESSAGE

    def _extract_csv(self, data: bytes, mime_type: str) -> str:
        try:
            return self.csv.extract(data)
        except Exception as exc:
            self._log_failure("CSV parsing failed", mime_type, exc)
            raise ExtractionError(CSV_EXTRACTION_MESSAGE) from exc

    @staticmethod
    def _log_failure(msg: str, mime_type: str, exc: Exception) -> None:
        logger.error(
            msg,
            extra_data={
                "mime_type": mime_type,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
            exc_info=True,
        )
