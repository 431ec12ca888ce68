"""
Conversions between raw strings and what the `os` module hands out.

On POSIX systems `os` functions return `str` objects whose undecodable bytes are
smuggled through as lone surrogates (`surrogateescape`), or plain `bytes` when
given `bytes`. On Windows they return `str` objects that may hold unpaired UTF-16
surrogates. Both shapes map losslessly onto a `RawString`.
"""

import os
from typing import Union

from .errors import EncodingError
from .platform import Encoding, resolve_encoding
from .strings import RawStr, RawString

OsValue = Union[str, bytes, "os.PathLike"]


def from_os(value: OsValue, encoding: Union[str, Encoding, None] = None) -> RawString:
    """Owned raw string for a `str`, `bytes` or path-like object returned by the `os` module."""
    if isinstance(value, RawStr):
        return RawString(value, encoding)
    value = os.fspath(value)
    encoding = resolve_encoding(encoding)
    if isinstance(value, bytes):
        # Bytes from `os` are already the raw representation on POSIX, but must be checked on WTF-8
        raw = RawString.from_bytes(value, encoding)
        if raw is None:
            raise EncodingError(f"{value!r} is not representable by the {encoding.name} encoding")
        return raw
    return RawString(value, encoding)


def to_os(raw: RawStr) -> str:
    """A `str` that `os` functions accept for the same platform string."""
    return raw.to_os_str()


__all__ = ["from_os", "to_os"]
