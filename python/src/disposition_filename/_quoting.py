"""Quoted-string, percent-escape and ext-value handling for parameter values."""

from __future__ import annotations

import re

from ._charset import Decoded, textdecode

_ESCAPE_PAIR_RE = re.compile(r"\\(.)")
_PERCENT_RE = re.compile(r"%(?:u([0-9A-Fa-f]{4})|([0-9A-Fa-f]{2}))")
_LANGUAGE_RE = re.compile(r"^[^']*'")


def rfc2616_unquote(value: str) -> str:
    """Strip quoted-string syntax (RFC 2616 section 2.2) from a parameter value.

    Values that do not start with ``"`` are returned as is. The string ends at
    the first unescaped ``"``; a missing closing quote runs to the end of the
    value.

    Examples:
        >>> rfc2616_unquote('"a \\\\"b\\\\" c"; x')
        'a "b" c'
        >>> rfc2616_unquote('"unterminated')
        'unterminated'
    """
    if not value.startswith('"'):
        return value

    parts = value[1:].split('\\"')
    unquoted: list[str] = []
    for part in parts:
        end = part.find('"')
        if end != -1:
            unquoted.append(_ESCAPE_PAIR_RE.sub(r"\1", part[:end]))
            break
        unquoted.append(_ESCAPE_PAIR_RE.sub(r"\1", part))
    return '"'.join(unquoted)


def _unescape_match(match: re.Match[str]) -> str:
    wide, byte = match.groups()
    return chr(int(wide or byte, 16))


def unescape(value: str) -> str:
    """Undo ``%XX`` and ``%uXXXX`` escapes; malformed escapes are kept verbatim."""
    return _PERCENT_RE.sub(_unescape_match, value)


def rfc5987_decode(extvalue: str) -> Decoded:
    """Decode an RFC 5987 ext-value (``charset'language'value``).

    The language tag is ignored. A value without any ``'`` is accepted as is,
    since some servers send ``filename*=`` without the charset prefix.
    """
    charset, sep, rest = extvalue.partition("'")
    if not sep:
        return Decoded(extvalue)
    return textdecode(charset, _LANGUAGE_RE.sub("", rest, count=1))
