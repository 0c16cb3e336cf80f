"""Locate filename parameters in a Content-Disposition value and reassemble RFC 2231 continuations."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ._charset import Decoded
from ._quoting import rfc2616_unquote, rfc5987_decode, unescape
from ._source import ParameterForm

logger = logging.getLogger("disposition_filename")


# Header values hold one byte per character, so only ASCII whitespace counts;
# "\x85" and "\xa0" occur inside UTF-8 sequences.
_WS = r"[\t\n\v\f\r ]"


def _param_re(attribute_pattern: str) -> re.Pattern[str]:
    # value = token | quoted-string (RFC 2616 section 3.6, RFC 6266 section 4.1).
    # The closing quote is optional.
    return re.compile(
        r"(?:^|;)" + _WS + "*" + attribute_pattern + _WS + "*=" + _WS + "*"
        r'([^";\t\n\v\f\r ][^;\t\n\v\f\r ]*|"(?:[^"\\]|\\"?)+"?)',
        re.IGNORECASE,
    )


_EXTENDED_RE = _param_re(r"filename\*")
_PLAIN_RE = _param_re(r"filename")
# filename*N= and filename*N*=; N > 0 must not start with "0".
_CONTINUATION_RE = _param_re(r"filename\*((?!0[0-9])[0-9]+)(\*?)")


@dataclass(frozen=True)
class ContinuationPart:
    """One ``filename*N`` piece of an RFC 2231 split value."""

    index: int
    extended: bool
    raw: str


@dataclass(frozen=True)
class ParameterMatch:
    """The filename parameter that won the priority order.

    ``value`` holds the raw value for the extended and plain forms; ``parts``
    holds the contiguous continuation pieces, ordered by index, and
    ``joined`` their reassembled value.
    """

    form: ParameterForm
    value: str | None = field(default=None)
    parts: tuple[ContinuationPart, ...] = field(default=())
    joined: Decoded | None = field(default=None)


def find_continuation_parts(header_value: str) -> tuple[ContinuationPart, ...] | None:
    """Collect the contiguous ``filename*0``, ``filename*1``, ... parts.

    Later duplicates of an index are ignored, except for index 0 where a
    duplicate invalidates the whole sequence. Collection stops at the first
    missing index.

    Returns:
        The ordered parts, or ``None`` if there is no valid part 0.
    """
    found: dict[int, ContinuationPart] = {}
    for match in _CONTINUATION_RE.finditer(header_value):
        index = int(match.group(1))
        if index in found:
            if index == 0:
                logger.debug("Duplicate filename*0 in %r, ignoring continuations", header_value)
                return None
            continue
        found[index] = ContinuationPart(index, bool(match.group(2)), match.group(3))

    parts: list[ContinuationPart] = []
    while len(parts) in found:
        parts.append(found[len(parts)])
    if len(parts) < len(found):
        logger.debug("Continuation parts after filename*%d are not contiguous, truncating", len(parts))
    return tuple(parts) if parts else None


def reassemble_continuations(parts: tuple[ContinuationPart, ...]) -> Decoded:
    """Unquote, unescape and join continuation parts.

    Only an extended part 0 may carry the ``charset'language'`` prefix.
    """
    charset_applied = False
    texts: list[str] = []
    for part in parts:
        text = rfc2616_unquote(part.raw)
        if part.extended:
            text = unescape(text)
            if part.index == 0:
                decoded = rfc5987_decode(text)
                text = decoded.text
                charset_applied = decoded.charset_applied
        texts.append(text)
    return Decoded("".join(texts), charset_applied)


def find_extended_value(header_value: str) -> str | None:
    """Return the raw value of the first ``filename*`` parameter."""
    match = _EXTENDED_RE.search(header_value)
    return match.group(1) if match else None


def find_plain_value(header_value: str) -> str | None:
    """Return the raw value of the first ``filename`` parameter."""
    match = _PLAIN_RE.search(header_value)
    return match.group(1) if match else None


def locate_filename_parameter(header_value: str) -> ParameterMatch | None:
    """Find the filename parameter with the highest priority.

    ``filename*`` beats ``filename*N`` continuations, which beat plain
    ``filename``. Continuations that are invalid or reassemble to an empty
    value do not count.

    Examples:
        >>> locate_filename_parameter('attachment; filename="a.pdf"; filename*=UTF-8\\'\\'b.pdf').form
        <ParameterForm.EXTENDED: 'filename*'>
        >>> locate_filename_parameter("inline") is None
        True
    """
    value = find_extended_value(header_value)
    if value is not None:
        return ParameterMatch(ParameterForm.EXTENDED, value=value)

    parts = find_continuation_parts(header_value)
    if parts:
        joined = reassemble_continuations(parts)
        if joined.text:
            return ParameterMatch(ParameterForm.CONTINUATION, parts=parts, joined=joined)
        logger.debug("filename*N continuations reassemble to an empty value, ignoring them")

    value = find_plain_value(header_value)
    if value is not None:
        return ParameterMatch(ParameterForm.PLAIN, value=value)

    return None
