"""RFC 2047 encoded-word decoding for filename values."""

from __future__ import annotations

import base64
import binascii
import logging
import re

from ._charset import Decoded, textdecode

logger = logging.getLogger("disposition_filename")

# encoded-word = "=?" charset "?" encoding "?" encoded-text "?="
# encoded-text may contain "?" and space, as browsers accept it.
_ENCODED_WORD_RE = re.compile(r"=\?([A-Za-z0-9_-]*)\?([QqBb])\?((?:[^?]|\?(?!=))*)\?=")
_REJECT_RE = re.compile(r"[\x00-\x19\x80-\xff]")
_Q_HEX_RE = re.compile(r"=([0-9a-fA-F]{2})")
_ASCII_WHITESPACE_RE = re.compile(r"[\t\n\f\r ]")
_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*")


def _atob(text: str) -> str | None:
    """Forgiving base64 decode to a byte string, or ``None`` if it is not base64."""
    data = _ASCII_WHITESPACE_RE.sub("", text)
    if len(data) % 4 == 0:
        if data.endswith("=="):
            data = data[:-2]
        elif data.endswith("="):
            data = data[:-1]
    if len(data) % 4 == 1 or not _BASE64_RE.fullmatch(data):
        return None
    try:
        raw = base64.b64decode(data + "=" * (-len(data) % 4), validate=True)
    except binascii.Error:
        return None
    return raw.decode("latin-1")


class _WordDecoder:
    """Substitutes encoded words and remembers whether any charset was applied."""

    def __init__(self) -> None:
        self.charset_applied = False

    def __call__(self, match: re.Match[str]) -> str:
        charset, encoding, text = match.groups()
        if encoding in "Qq":
            text = text.replace("_", " ")
            text = _Q_HEX_RE.sub(lambda m: chr(int(m.group(1), 16)), text)
        else:
            decoded = _atob(text)
            if decoded is None:
                logger.debug("Encoded word %r has an invalid base64 payload", match.group(0))
            else:
                text = decoded
        result = textdecode(charset, text)
        self.charset_applied = self.charset_applied or result.charset_applied
        return result.text


def rfc2047_decode(value: str) -> Decoded:
    """Decode the RFC 2047 encoded words in ``value``.

    Only values that start with ``=?`` and contain no control or high-bit
    characters are considered, so quoted strings that merely contain
    ``=?...?=`` are left alone.

    Returns:
        A :class:`~disposition_filename._charset.Decoded` result.

    Examples:
        >>> rfc2047_decode("=?UTF-8?Q?r=C3=A9sum=C3=A9?=.pdf").text
        'résumé.pdf'
    """
    if not value.startswith("=?") or _REJECT_RE.search(value):
        return Decoded(value)

    decoder = _WordDecoder()
    text = _ENCODED_WORD_RE.sub(decoder, value)
    return Decoded(text, decoder.charset_applied)
