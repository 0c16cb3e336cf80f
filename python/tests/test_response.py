"""Tests for _response module -- reading the filename from httpx responses and headers."""

from __future__ import annotations

import httpx
import pytest
import respx

from disposition_filename import filename_from_headers, filename_from_response

UTF8_HEADER = b'attachment; filename="\xc3\xa9t\xc3\xa9.pdf"'


class TestFilenameFromResponse:
    def test_plain(self) -> None:
        response = httpx.Response(200, headers={"Content-Disposition": 'attachment; filename="a.pdf"'})
        assert filename_from_response(response) == "a.pdf"

    def test_raw_utf8_bytes(self) -> None:
        response = httpx.Response(200, headers={"Content-Disposition": UTF8_HEADER})
        assert filename_from_response(response) == "été.pdf"

    def test_raw_latin1_bytes(self) -> None:
        response = httpx.Response(200, headers={"Content-Disposition": b'attachment; filename="caf\xe9.pdf"'})
        assert filename_from_response(response) == "café.pdf"

    def test_missing_header(self) -> None:
        response = httpx.Response(200, headers={"Content-Type": "application/pdf"})
        assert filename_from_response(response) is None

    def test_other_extension(self) -> None:
        response = httpx.Response(200, headers={"Content-Disposition": 'attachment; filename="a.txt"'})
        assert filename_from_response(response) is None
        assert filename_from_response(response, extension=".txt") == "a.txt"

    def test_first_header_wins(self) -> None:
        headers = httpx.Headers(
            [
                ("Content-Disposition", 'attachment; filename="first.pdf"'),
                ("Content-Disposition", 'attachment; filename="second.pdf"'),
            ]
        )
        assert filename_from_response(httpx.Response(200, headers=headers)) == "first.pdf"

    @respx.mock
    def test_from_mocked_transport(self) -> None:
        respx.get("https://example.com/report").mock(
            return_value=httpx.Response(
                200,
                headers={"Content-Disposition": b"attachment; filename*=UTF-8''%e2%82%ac%20rates.pdf"},
                content=b"%PDF-1.4\n",
            )
        )
        response = httpx.get("https://example.com/report")
        assert filename_from_response(response) == "€ rates.pdf"

    @respx.mock
    def test_from_mocked_transport_raw_utf8(self) -> None:
        respx.get("https://example.com/doc").mock(
            return_value=httpx.Response(200, headers={"Content-Disposition": UTF8_HEADER}, content=b"%PDF-1.4\n")
        )
        with httpx.Client() as client:
            response = client.get("https://example.com/doc")
        assert filename_from_response(response) == "été.pdf"


class TestFilenameFromHeaders:
    def test_mapping_is_case_insensitive(self) -> None:
        assert filename_from_headers({"content-disposition": 'attachment; filename="a.pdf"'}) == "a.pdf"
        assert filename_from_headers({"CONTENT-DISPOSITION": 'attachment; filename="a.pdf"'}) == "a.pdf"

    def test_mapping_with_bytes(self) -> None:
        assert filename_from_headers({"Content-Disposition": UTF8_HEADER}) == "été.pdf"

    def test_mapping_without_header(self) -> None:
        assert filename_from_headers({}) is None

    def test_empty_header(self) -> None:
        assert filename_from_headers({"Content-Disposition": ""}) is None

    def test_httpx_headers(self) -> None:
        headers = httpx.Headers({"Content-Disposition": UTF8_HEADER})
        assert filename_from_headers(headers) == "été.pdf"

    def test_logged(self, debug_logs: pytest.LogCaptureFixture) -> None:
        filename_from_headers({"Content-Disposition": 'attachment; filename="a.pdf"'})
        assert "Filename from Content-Disposition" in debug_logs.text
