"""Charset-directed decoding of byte strings carried in header parameters."""

from __future__ import annotations

import codecs
import logging
import re
from typing import NamedTuple

logger = logging.getLogger("disposition_filename")

_BYTE_STRING_RE = re.compile(r"[\x00-\xff]+")
_HIGH_BIT_RE = re.compile(r"[\x80-\xff]")
_UTF8_LABEL_RE = re.compile(r"utf-?8", re.IGNORECASE)

FALLBACK_CHARSET = "iso-8859-1"


class Decoded(NamedTuple):
    """Result of a decode attempt.

    ``charset_applied`` is ``True`` when an explicit charset decoded the value,
    which means the encoding fixup must not run on it any more.
    """

    text: str
    charset_applied: bool = False


# Decoders that drop one leading byte-order mark, like a browser TextDecoder.
_BOM_CODECS = frozenset({"utf-8", "utf-16-le", "utf-16-be"})


def _strict_decode(charset: str, raw: bytes) -> str | None:
    try:
        codec = codecs.lookup(charset)
        text = raw.decode(codec.name, "strict")
    except (LookupError, ValueError) as exc:
        logger.debug("Charset %r failed to decode %r: %s", charset, raw, exc)
        return None
    if codec.name in _BOM_CODECS and text.startswith("\ufeff"):
        text = text[1:]
    return text


def _utf8_recover(raw: bytes) -> str | None:
    # CESU-8: supplementary characters sent as two 3-byte surrogates
    # (Java and MySQL utf8mb3 emit these). Lone surrogates still fail.
    try:
        text = raw.decode("utf-8", "surrogatepass")
        text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeError:
        return None
    logger.debug("Recovered CESU-8 bytes %r", raw)
    return text[1:] if text.startswith("\ufeff") else text


def textdecode(charset: str, value: str) -> Decoded:
    """Decode ``value`` (one character per byte) with the named ``charset``.

    The value is returned unchanged when no charset is given, when it holds
    characters above U+00FF (it is text already) or when decoding fails.

    Examples:
        >>> textdecode("utf-8", "\\xe2\\x82\\xac")
        Decoded(text='€', charset_applied=True)
        >>> textdecode("bogus-charset", "abc")
        Decoded(text='abc', charset_applied=False)
    """
    if not charset:
        return Decoded(value)
    if not _BYTE_STRING_RE.fullmatch(value):
        return Decoded(value)

    raw = value.encode("latin-1")
    text = _strict_decode(charset, raw)
    if text is None and _UTF8_LABEL_RE.fullmatch(charset):
        text = _utf8_recover(raw)
    if text is None:
        return Decoded(value)
    return Decoded(text, charset_applied=True)


def fixup_encoding(value: str, needs_fixup: bool) -> str:
    """Guess the charset of leftover high-bit bytes: UTF-8 first, then ISO-8859-1."""
    if not needs_fixup or not _HIGH_BIT_RE.search(value):
        return value

    result = textdecode("utf-8", value)
    if not result.charset_applied:
        logger.debug("Value %r is not UTF-8, falling back to %s", value, FALLBACK_CHARSET)
        result = textdecode(FALLBACK_CHARSET, result.text)
    return result.text
