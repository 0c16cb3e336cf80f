"""Disposition Filename - Python SDK.

Extracts a usable filename from an HTTP Content-Disposition header value,
following RFC 6266, RFC 5987, RFC 2231, RFC 2047 and RFC 2616.
"""

__version__ = "1.0.0"

from ._content_disposition import DEFAULT_EXTENSION, extract_filename_from_header, get_filename_from_content_disposition
from ._params import ContinuationPart, ParameterMatch, locate_filename_parameter
from ._response import filename_from_headers, filename_from_response
from ._source import ParameterForm

__all__ = [
    "DEFAULT_EXTENSION",
    "ContinuationPart",
    "ParameterForm",
    "ParameterMatch",
    "extract_filename_from_header",
    "filename_from_headers",
    "filename_from_response",
    "get_filename_from_content_disposition",
    "locate_filename_parameter",
]
