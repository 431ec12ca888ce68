"""
Exceptions raised by RawStr.

Searching, matching and splitting never fail on malformed input: invalid UTF-8 is
simply excluded from the text sections. The only failure-shaped outcomes are the
conversions that cannot represent a buffer in the requested form.
"""


class EncodingError(ValueError):
    """Raised when a buffer cannot be represented in the requested form."""

    pass


class InteriorNulError(EncodingError):
    """Raised when a NUL-terminated representation is requested for data with an embedded zero byte."""

    def __init__(self, position: int):
        super().__init__(f"embedded null byte at offset {position}")
        self.position = position
