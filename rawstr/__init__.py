"""
Pattern search, matching and splitting over platform strings: byte buffers that
are mostly, but not guaranteed to be, valid UTF-8.
"""

from .errors import EncodingError, InteriorNulError
from .interop import from_os, to_os
from .matching import Match, MatchIterator, SectionIterator, SplitIterator, SplitNIterator
from .patterns import CharSetPattern, LiteralPattern, Pattern, PredicatePattern, as_pattern
from .platform import (
    PLATFORM_VARIABLE,
    Encoding,
    PosixEncoding,
    Wtf8Encoding,
    default_encoding,
    get_encoding,
    set_default_encoding,
)
from .search import contains_raw, find_all_raw, find_raw
from .sections import Section, Utf8Sections
from .strings import RawStr, RawString, concat

__version__ = "1.0.0"

__all__ = [
    "RawStr",
    "RawString",
    "concat",
    "from_os",
    "to_os",
    "Section",
    "Utf8Sections",
    "Match",
    "MatchIterator",
    "SectionIterator",
    "SplitIterator",
    "SplitNIterator",
    "Pattern",
    "LiteralPattern",
    "PredicatePattern",
    "CharSetPattern",
    "as_pattern",
    "find_raw",
    "find_all_raw",
    "contains_raw",
    "Encoding",
    "PosixEncoding",
    "Wtf8Encoding",
    "PLATFORM_VARIABLE",
    "get_encoding",
    "default_encoding",
    "set_default_encoding",
    "EncodingError",
    "InteriorNulError",
]
