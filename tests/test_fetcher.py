"""
Tests for byte acquisition from files and URLs.
"""

from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from doctext.config import FetchConfig
from doctext.exceptions import FetchError, UnknownMimeTypeError
from doctext.fetcher import DocumentFetcher, read_file


def make_response(status_code=200, headers=None, chunks=(b"",)):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    response.iter_content.return_value = iter(chunks)
    return response


def make_fetcher(response=None, config=None, error=None):
    session = Mock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return DocumentFetcher(config=config, session=session), session


class TestReadFile:
    def test_reads_whole_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00\x01payload")

        assert read_file(path) == b"\x00\x01payload"
        assert read_file(str(path)) == b"\x00\x01payload"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_file(tmp_path / "missing.txt")


class TestDocumentFetcher:
    def test_chunks_joined_in_arrival_order(self):
        response = make_response(
            headers={"Content-Type": "text/plain; charset=utf-8"},
            chunks=[b"first ", b"", b"second ", b"third"],
        )
        fetcher, _ = make_fetcher(response)

        document = fetcher.fetch("https://example.com/doc")

        assert document.content == b"first second third"
        assert document.mime_type == "text/plain"
        assert document.url == "https://example.com/doc"
        assert document.size_bytes == len(b"first second third")
        response.close.assert_called_once()

    def test_request_options_follow_config(self):
        config = FetchConfig(
            timeout=5.0, follow_redirects=True, chunk_size=1024, headers={"User-Agent": "doctext"}
        )
        response = make_response(headers={"Content-Type": "text/csv"}, chunks=[b"a"])
        fetcher, session = make_fetcher(response, config=config)

        fetcher.fetch("http://example.com/a.csv")

        session.get.assert_called_once_with(
            "http://example.com/a.csv",
            stream=True,
            timeout=5.0,
            allow_redirects=True,
            headers={"User-Agent": "doctext"},
        )
        response.iter_content.assert_called_once_with(chunk_size=1024)

    def test_defaults_do_not_follow_redirects_or_time_out(self):
        response = make_response(headers={"Content-Type": "text/csv"})
        fetcher, session = make_fetcher(response)

        fetcher.fetch("http://example.com/a.csv")

        _, kwargs = session.get.call_args
        assert kwargs["allow_redirects"] is False
        assert kwargs["timeout"] is None

    @pytest.mark.parametrize("status_code", [301, 404, 500])
    def test_non_200_status(self, status_code):
        response = make_response(status_code=status_code, headers={"Content-Type": "text/plain"})
        fetcher, _ = make_fetcher(response)

        with pytest.raises(FetchError, match=str(status_code)) as exc_info:
            fetcher.fetch("https://example.com/missing.pdf")

        assert exc_info.value.status_code == status_code
        response.iter_content.assert_not_called()
        response.close.assert_called_once()

    def test_mime_falls_back_to_url_extension(self):
        response = make_response(chunks=[b"%PDF"])
        fetcher, _ = make_fetcher(response)

        document = fetcher.fetch("https://example.com/files/report.pdf?sig=abc")

        assert document.mime_type == "application/pdf"

    def test_unknown_mime(self):
        response = make_response(chunks=[b"data"])
        fetcher, _ = make_fetcher(response)

        with pytest.raises(UnknownMimeTypeError, match="Unknown mime type") as exc_info:
            fetcher.fetch("https://example.com/download")

        assert exc_info.value.url == "https://example.com/download"

    def test_connection_error(self):
        error = requests.ConnectionError("connection refused")
        fetcher, _ = make_fetcher(error=error)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://example.com/doc.txt")

        assert exc_info.value.__cause__ is error
        assert exc_info.value.status_code is None

    def test_error_while_streaming_body(self):
        def broken_stream():
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        response = make_response(headers={"Content-Type": "text/plain"})
        response.iter_content.return_value = broken_stream()
        fetcher, _ = make_fetcher(response)

        with pytest.raises(FetchError, match="Failed to read document body"):
            fetcher.fetch("https://example.com/doc.txt")

        response.close.assert_called_once()

    @pytest.mark.parametrize("url", ["ftp://example.com/a.txt", "/local/a.txt", "file:///a.txt"])
    def test_rejects_non_http_urls(self, url):
        fetcher, session = make_fetcher(make_response())

        with pytest.raises(FetchError, match="Unsupported URL scheme"):
            fetcher.fetch(url)

        session.get.assert_not_called()
