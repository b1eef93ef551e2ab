"""Custom exceptions for doctext."""

from typing import Optional

UNSUPPORTED_FORMAT_MESSAGE = "Формат файла не поддерживается."
WORD_EXTRACTION_MESSAGE = "Ошибка при извлечении текста из DOC/DOCX файла."
SPREADSHEET_EXTRACTION_MESSAGE = "Ошибка при обработке XLS/XLSX файла."
CSV_EXTRACTION_MESSAGE = "Ошибка при чтении CSV файла."
FETCH_STATUS_MESSAGE = "Ошибка при получении документа: {status_code}"
UNKNOWN_MIME_MESSAGE = "Unknown mime type"


class DocTextError(Exception):
    """Base exception for doctext errors."""

    pass


class UnsupportedTypeError(DocTextError):
    """Raised when no extraction path exists for a MIME type."""

    def __init__(self, mime_type: Optional[str] = None):
        super().__init__(UNSUPPORTED_FORMAT_MESSAGE)
        self.mime_type = mime_type


class ExtractionError(DocTextError):
    """Raised when a decoder fails to produce text."""

    pass


class DecodingError(DocTextError):
    """Raised when text content is not valid UTF-8."""

    pass


class FetchError(DocTextError):
    """Raised when a remote document cannot be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnknownMimeTypeError(FetchError):
    """Raised when a fetched document has no resolvable MIME type."""

    def __init__(self, url: str):
        super().__init__(UNKNOWN_MIME_MESSAGE)
        self.url = url
