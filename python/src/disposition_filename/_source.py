"""ParameterForm enum for identifying which filename parameter was found."""

from enum import Enum


class ParameterForm(str, Enum):
    """Enumeration of the filename parameter forms, in priority order.

    Examples:
        >>> form = ParameterForm.EXTENDED      # filename*=UTF-8''a.pdf
        >>> form = ParameterForm.CONTINUATION  # filename*0="a"; filename*1=".pdf"
        >>> form = ParameterForm.PLAIN         # filename="a.pdf"
    """

    EXTENDED = "filename*"
    CONTINUATION = "filename*N"
    PLAIN = "filename"
