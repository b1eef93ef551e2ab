"""Byte acquisition from local files and HTTP(S) URLs."""

from os import PathLike
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests

from doctext.config import FetchConfig
from doctext.detector import MimeResolver
from doctext.exceptions import FETCH_STATUS_MESSAGE, FetchError, UnknownMimeTypeError
from doctext.logger import Timer, get_logger
from doctext.models import FetchedDocument

logger = get_logger(__name__)


def read_file(path: Union[str, PathLike]) -> bytes:
    """Read a whole file into memory.

    Raises:
        OSError: If the file does not exist or cannot be read
    """
    with Timer("file_read") as timer:
        data = Path(path).read_bytes()

    logger.debug(
        "Read local file",
        extra_data={
            "path": str(path),
            "file_size_bytes": len(data),
            "read_time_ms": timer.get_elapsed_ms(),
        },
    )
    return data


class DocumentFetcher:
    """Downloads a document with a single GET request."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        session: Optional[requests.Session] = None,
        resolver: Optional[MimeResolver] = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            config: Fetch configuration. If None, uses defaults.
            session: requests session to issue the request with. If None, creates one.
            resolver: Fallback MIME resolver for URLs without a Content-Type.
        """
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.resolver = resolver or MimeResolver()

    def fetch(self, url: str) -> FetchedDocument:
        """Fetch ``url`` and return its body and MIME type.

        Raises:
            FetchError: Unsupported scheme, connection failure or non-200 status
            UnknownMimeTypeError: Neither Content-Type nor URL extension give a MIME type
        """
        scheme = urlparse(url).scheme.lower()
        if scheme not in ("http", "https"):
            raise FetchError(f"Unsupported URL scheme: {scheme or '<none>'}")

        logger.debug(
            "Fetching remote document",
            extra_data={
                "url": url,
                "timeout": self.config.timeout,
                "follow_redirects": self.config.follow_redirects,
            },
        )

        with Timer("fetch") as timer:
            try:
                response = self.session.get(
                    url,
                    stream=True,
                    timeout=self.config.timeout,
                    allow_redirects=self.config.follow_redirects,
                    headers=self.config.headers or None,
                )
            except requests.RequestException as exc:
                logger.error(
                    "Connection to remote document failed",
                    extra_data={"url": url, "error_type": type(exc).__name__, "error": str(exc)},
                )
                raise FetchError(f"Failed to fetch document: {exc}") from exc

            try:
                mime_type = self._check_response(url, response)
                content = self._read_body(url, response)
            finally:
                response.close()

        logger.info(
            "Fetched remote document",
            extra_data={
                "url": url,
                "mime_type": mime_type,
                "size_bytes": len(content),
                "fetch_time_ms": timer.get_elapsed_ms(),
            },
        )
        return FetchedDocument(
            url=url,
            mime_type=mime_type,
            content=content,
            status_code=response.status_code,
        )

    def _check_response(self, url: str, response: requests.Response) -> str:
        if response.status_code != 200:
            logger.warning(
                "Remote document returned non-200 status",
                extra_data={"url": url, "status_code": response.status_code},
            )
            raise FetchError(
                FETCH_STATUS_MESSAGE.format(status_code=response.status_code),
                status_code=response.status_code,
            )

        mime_type = MimeResolver.normalize(response.headers.get("Content-Type"))
        if mime_type is None:
            mime_type = self.resolver.resolve(url)
        if mime_type is None:
            logger.warning("Unable to determine MIME type of remote document", extra_data={"url": url})
            raise UnknownMimeTypeError(url)
        return mime_type

    def _read_body(self, url: str, response: requests.Response) -> bytes:
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                if chunk:
                    chunks.append(chunk)
        except requests.RequestException as exc:
            logger.error(
                "Connection dropped while reading remote document",
                extra_data={
                    "url": url,
                    "chunks_received": len(chunks),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise FetchError(f"Failed to read document body: {exc}") from exc
        return b"".join(chunks)
