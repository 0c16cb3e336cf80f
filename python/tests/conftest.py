"""Shared fixtures for disposition-filename tests."""

from __future__ import annotations

import logging

import pytest


# ---------------------------------------------------------------------------
# Header fixtures
# ---------------------------------------------------------------------------

# Raw UTF-8 bytes for "été.pdf", as servers send them without any encoding.
UTF8_RAW_FILENAME = "été.pdf".encode("utf-8")


def _header_text(raw: bytes) -> str:
    """Header bytes as one character per byte, the way the parser reads them."""
    return raw.decode("latin-1")


@pytest.fixture()
def utf8_raw_header_bytes() -> bytes:
    return b'attachment; filename="' + UTF8_RAW_FILENAME + b'"'


@pytest.fixture()
def utf8_raw_header(utf8_raw_header_bytes: bytes) -> str:
    return _header_text(utf8_raw_header_bytes)


@pytest.fixture()
def latin1_raw_header() -> str:
    return _header_text(b'attachment; filename="caf\xe9.pdf"')


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture()
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture the package's debug logs."""
    caplog.set_level(logging.DEBUG, logger="disposition_filename")
    return caplog
