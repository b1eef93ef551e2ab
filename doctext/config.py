"""Configuration classes for doctext."""

import os
from dataclasses import dataclass, field
from typing import Optional

PDF_FORMATS = ("text", "markdown")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class FetchConfig:
    """Configuration for remote document fetching.

    Examples:
        >>> # Defaults: single GET, no timeout, redirects are not followed
        >>> config = FetchConfig()

        >>> # Bounded wait for slow servers
        >>> config = FetchConfig(timeout=30.0, follow_redirects=True)
    """

    timeout: Optional[float] = None
    """Seconds to wait for connect and for each read. None waits indefinitely,
    so a hung server blocks the call."""

    follow_redirects: bool = False
    """Follow 3xx responses. When False a redirect is a non-200 failure."""

    chunk_size: int = 64 * 1024
    """Size of the chunks read from the response body."""

    headers: dict[str, str] = field(default_factory=dict)
    """Extra request headers sent with every GET."""

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive or None")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")


@dataclass
class ExtractorConfig:
    """Configuration for document extraction."""

    fetch: FetchConfig = field(default_factory=FetchConfig)

    pdf_format: str = "text"
    """PDF output: "text" for plain page text, "markdown" for pymupdf4llm output."""

    pdf_table_strategy: str = "lines_strict"
    """Table detection strategy passed to pymupdf4llm (markdown format only)."""

    pdf_fontsize_limit: int = 3
    """Ignore text smaller than this many points (markdown format only)."""

    strict_spreadsheet_errors: bool = False
    """Raise ExtractionError on XLS/XLSX failures instead of returning the
    error message as the extracted text."""

    csv_separator: str = ", "
    """Separator placed between field values of a CSV row."""

    def __post_init__(self) -> None:
        if self.pdf_format not in PDF_FORMATS:
            raise ValueError(
                f"pdf_format must be one of {', '.join(PDF_FORMATS)}, got {self.pdf_format!r}"
            )

    @classmethod
    def from_env(cls) -> "ExtractorConfig":
        """Build configuration from DOCTEXT_* environment variables."""
        timeout = os.environ.get("DOCTEXT_FETCH_TIMEOUT")
        fetch = FetchConfig(
            timeout=float(timeout) if timeout else None,
            follow_redirects=_env_flag("DOCTEXT_FOLLOW_REDIRECTS", False),
        )
        return cls(
            fetch=fetch,
            pdf_format=os.environ.get("DOCTEXT_PDF_FORMAT", "text"),
            strict_spreadsheet_errors=_env_flag(
                "DOCTEXT_STRICT_SPREADSHEET_ERRORS", False
            ),
        )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
