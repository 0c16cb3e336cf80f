"""Extract a filename from a Content-Disposition header value.

Follows RFC 6266 (with RFC 5987 ext-values), RFC 2231 continuations,
RFC 2047 encoded words and the quoted-string/token syntax of RFC 2616, and
tolerates the malformed variants real servers send.
"""

from __future__ import annotations

import logging

from ._charset import fixup_encoding
from ._params import locate_filename_parameter
from ._quoting import rfc2616_unquote, rfc5987_decode, unescape
from ._rfc2047 import rfc2047_decode
from ._source import ParameterForm

logger = logging.getLogger("disposition_filename")

DEFAULT_EXTENSION = ".pdf"


def _as_header_text(value: str | bytes) -> str:
    # One character per byte, as the parameter grammar expects.
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return value


def get_filename_from_content_disposition(content_disposition: str | bytes | None) -> str | None:
    """Decode the filename carried by a Content-Disposition header value.

    ``filename*`` takes priority over ``filename*0``, ``filename*1``, ...
    continuations, which take priority over a plain ``filename``.

    Args:
        content_disposition: The raw header value. ``bytes`` are read as
            ISO-8859-1; a ``str`` should hold one character per header byte.

    Returns:
        The best-effort decoded filename, or ``None`` if the header has no
        filename parameter.

    Examples:
        >>> get_filename_from_content_disposition('attachment; filename="report.pdf"')
        'report.pdf'
        >>> get_filename_from_content_disposition("attachment; filename*=UTF-8''%e2%82%ac%20rates.pdf")
        '€ rates.pdf'
    """
    if not content_disposition:
        return None
    header = _as_header_text(content_disposition)

    match = locate_filename_parameter(header)
    if match is None:
        logger.debug("No filename parameter in %r", header)
        return None
    logger.debug("Using %s parameter in %r", match.form.value, header)

    if match.form == ParameterForm.EXTENDED:
        # filename*=ext-value (RFC 5987, referenced by RFC 6266).
        ext = rfc5987_decode(unescape(rfc2616_unquote(match.value)))
        words = rfc2047_decode(ext.text)
        return fixup_encoding(words.text, not (ext.charset_applied or words.charset_applied))

    if match.form == ParameterForm.CONTINUATION:
        # filename*N= and filename*N*= (RFC 2231 section 3, referenced by RFC 5987).
        words = rfc2047_decode(match.joined.text)
        return fixup_encoding(words.text, not (match.joined.charset_applied or words.charset_applied))

    # filename=value (RFC 6266 section 4.1).
    words = rfc2047_decode(rfc2616_unquote(match.value))
    return fixup_encoding(words.text, not words.charset_applied)


def extract_filename_from_header(
    content_disposition: str | bytes | None,
    extension: str = DEFAULT_EXTENSION,
) -> str | None:
    """Return the header's filename if it ends with ``extension`` (case-insensitive).

    Args:
        content_disposition: The raw Content-Disposition header value, if any.
        extension: The required filename suffix, ``".pdf"`` by default.

    Returns:
        The decoded filename, or ``None`` if there is none or it has another
        extension.

    Examples:
        >>> extract_filename_from_header('attachment; filename="a.PDF"')
        'a.PDF'
        >>> extract_filename_from_header('attachment; filename="notes.txt"') is None
        True
    """
    if not content_disposition:
        return None
    filename = get_filename_from_content_disposition(content_disposition)
    if filename and filename.lower().endswith(extension.lower()):
        return filename
    return None
