"""Data models for doctext."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchedDocument:
    """Body and MIME type of a document downloaded over HTTP(S)."""

    url: str
    mime_type: str
    content: bytes
    status_code: int = 200

    @property
    def size_bytes(self) -> int:
        return len(self.content)
