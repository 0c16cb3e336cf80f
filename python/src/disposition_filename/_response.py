"""Read the suggested filename from httpx responses and headers."""

from __future__ import annotations

import logging
from typing import Mapping, Union

import httpx

from ._content_disposition import DEFAULT_EXTENSION, extract_filename_from_header

logger = logging.getLogger("disposition_filename")

HeadersLike = Union[httpx.Headers, Mapping[str, Union[str, bytes]]]


def _content_disposition(headers: HeadersLike) -> str | bytes | None:
    if isinstance(headers, httpx.Headers):
        # httpx may have decoded the value as UTF-8 already; go back to the bytes.
        for key, value in headers.raw:
            if key.lower() == b"content-disposition":
                return value
        return None
    for key, value in headers.items():
        if key.lower() == "content-disposition":
            return value
    return None


def filename_from_headers(headers: HeadersLike, extension: str = DEFAULT_EXTENSION) -> str | None:
    """Extract the filename from the first Content-Disposition header.

    Args:
        headers: Response headers, as ``httpx.Headers`` or a plain mapping.
            Mapping values may be ``bytes`` or one-character-per-byte ``str``.
        extension: The required filename suffix, ``".pdf"`` by default.

    Returns:
        The decoded filename, or ``None``.
    """
    cd = _content_disposition(headers)
    if not cd:
        return None
    filename = extract_filename_from_header(cd, extension=extension)
    logger.debug("Filename from Content-Disposition %r: %s", cd, filename)
    return filename


def filename_from_response(response: httpx.Response, extension: str = DEFAULT_EXTENSION) -> str | None:
    """Extract the filename suggested by an HTTP response.

    Examples:
        >>> response = httpx.Response(200, headers={"Content-Disposition": 'attachment; filename="a.pdf"'})
        >>> filename_from_response(response)
        'a.pdf'
    """
    return filename_from_headers(response.headers, extension=extension)
