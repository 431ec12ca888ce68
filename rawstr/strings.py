"""
Raw string containers.

`RawStr` is an immutable view over a slice of a byte buffer holding a platform
string: mostly, but not necessarily, valid UTF-8. Every textual operation runs on
the valid UTF-8 sections only, while offsets and pieces always refer back to the
original bytes, invalid ones included.

`RawString` is the owned, mutable counterpart backed by a `bytearray`. Views and
iterators taken from it hold an export of that buffer, so resizing the string while
any of them is alive raises `BufferError`.
"""

import functools
from typing import Iterable, List, Optional, Tuple, Union

from .errors import EncodingError, InteriorNulError
from .matching import (
    Match,
    MatchDriver,
    MatchIterator,
    SectionIterator,
    SplitDriver,
    SplitIterator,
    SplitNIterator,
)
from .patterns import Pattern, as_pattern
from .platform import Encoding, resolve_encoding
from .search import contains_raw
from .sections import Section, Utf8Sections
from .utf8 import Buffer, width_at

EncodingLike = Union[str, Encoding, None]


def _raw_parts(value, encoding: Encoding) -> Tuple[Buffer, int, int]:
    """Raw representation of a `RawStr`, `str` or bytes-like `value` as `(data, start, end)`."""
    if isinstance(value, RawStr):
        return value._data, value._start, value._end
    if isinstance(value, str):
        data = encoding.from_str(value)
    elif isinstance(value, (bytes, bytearray)):
        data = value
    else:
        data = bytes(memoryview(value))
    return data, 0, len(data)


def _split_pattern(pattern) -> Pattern:
    pattern = as_pattern(pattern)
    if pattern.matches_empty:
        raise ValueError("empty separator")
    return pattern


@functools.total_ordering
class RawStr:
    """
    Immutable platform string.

    Args:
        source (str, bytes-like, RawStr): Text is encoded with the platform encoding,
            bytes-like objects are taken as the raw representation as-is.
        encoding (str or Encoding, optional): Overrides the process-wide default.
    """

    __slots__ = ("_data", "_start", "_end", "_encoding", "_pin")

    def __init__(self, source=b"", encoding: EncodingLike = None):
        if isinstance(source, RawStr):
            view = source._borrowed()
            self._data, self._start, self._end = view._data, view._start, view._end
            self._encoding = view._encoding if encoding is None else resolve_encoding(encoding)
            self._pin = view._pin
            return

        self._encoding = resolve_encoding(encoding)
        data, _, _ = _raw_parts(source, self._encoding)
        self._data = bytes(data)
        self._start = 0
        self._end = len(self._data)
        self._pin = None

    @classmethod
    def from_bytes(cls, data, encoding: EncodingLike = None):
        """Checked conversion from plain bytes; `None` if the platform cannot represent them."""
        encoding = resolve_encoding(encoding)
        raw = encoding.from_bytes(bytes(memoryview(data)))
        if raw is None:
            return None
        return cls(raw, encoding)

    @staticmethod
    def _view(data: Buffer, start: int, end: int, encoding: Encoding, pin) -> "RawStr":
        view = object.__new__(RawStr)
        view._data = data
        view._start = start
        view._end = end
        view._encoding = encoding
        view._pin = pin
        return view

    def _borrowed(self) -> "RawStr":
        return self

    def _slice(self, start: int, end: int) -> "RawStr":
        return RawStr._view(self._data, start, end, self._encoding, self._pin)

    def _text(self, start: int, end: int) -> str:
        return self._data[start:end].decode("utf-8")

    def _match(self, start: int, end: int) -> Match:
        return Match(start - self._start, self._text(start, end))

    def _section(self, start: int, end: int) -> Section:
        return Section(start - self._start, self._text(start, end))

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    # Size and comparison

    def __len__(self) -> int:
        return self._end - self._start

    def is_empty(self) -> bool:
        return self._end == self._start

    def __bool__(self) -> bool:
        return self._end > self._start

    def __bytes__(self) -> bytes:
        """The raw representation, which is WTF-8 rather than plain bytes on wide-character platforms."""
        return bytes(self._data[self._start : self._end])

    def _comparable(self, other) -> Optional[bytes]:
        if isinstance(other, RawStr):
            return bytes(other)
        if isinstance(other, str):
            try:
                return self._encoding.from_str(other)
            except EncodingError:
                return None
        return None

    def __eq__(self, other) -> bool:
        raw = self._comparable(other)
        if raw is None:
            return NotImplemented
        return bytes(self) == raw

    def __lt__(self, other) -> bool:
        raw = self._comparable(other)
        if raw is None:
            return NotImplemented
        return bytes(self) < raw

    def __hash__(self) -> int:
        """
        Hash of `to_os_str()`, so that equal `RawStr` and `str` values hash alike.

        The one exception is a `str` holding a surrogate pair under WTF-8. It compares
        equal to the string of the supplementary character the pair forms, which hashes
        like that character instead of like the pair.
        """
        return hash(self.to_os_str())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({bytes(self)!r})"

    def __str__(self) -> str:
        return self.to_str_lossy()

    # Conversions

    def to_str(self) -> Optional[str]:
        return self._encoding.to_str(self._data, self._start, self._end)

    def to_str_lossy(self) -> str:
        return self._encoding.to_str_lossy(self._data, self._start, self._end)

    def to_bytes(self) -> Optional[bytes]:
        return self._encoding.to_bytes(self._data, self._start, self._end)

    def to_cstring(self) -> bytes:
        """NUL-terminated bytes, as expected by C APIs."""
        data = self.to_bytes()
        if data is None:
            raise EncodingError(f"{self!r} cannot be represented as bytes by the {self._encoding.name} encoding")
        position = data.find(0)
        if position >= 0:
            raise InteriorNulError(position)
        return data + b"\0"

    def to_os_str(self) -> str:
        """A `str` accepted by the `os` module for the same platform string."""
        return self._encoding.to_os_str(self._data, self._start, self._end)

    def __fspath__(self) -> str:
        return self.to_os_str()

    def to_raw_string(self) -> "RawString":
        return RawString(self)

    # Raw-byte queries

    def contains_raw(self, needle) -> bool:
        data, start, end = _raw_parts(needle, self._encoding)
        return contains_raw(self._data, data[start:end], self._start, self._end)

    def startswith_raw(self, prefix) -> bool:
        data, start, end = _raw_parts(prefix, self._encoding)
        return self._data.startswith(data[start:end], self._start, self._end)

    def endswith_raw(self, suffix) -> bool:
        data, start, end = _raw_parts(suffix, self._encoding)
        return self._data.endswith(data[start:end], self._start, self._end)

    # Pattern queries

    def contains(self, pattern) -> bool:
        return self.find(pattern) >= 0

    def __contains__(self, item) -> bool:
        if isinstance(item, (bytes, bytearray, memoryview, RawStr)):
            return self.contains_raw(item)
        return self.contains(item)

    def startswith(self, pattern) -> bool:
        return as_pattern(pattern).is_prefix_of(self._data, self._start, self._end)

    def endswith(self, pattern) -> bool:
        return as_pattern(pattern).is_suffix_of(self._data, self._start, self._end)

    def find(self, pattern) -> int:
        """Offset of the first match of `pattern`, or -1."""
        found = MatchDriver(self._data, pattern, self._start, self._end).next_span()
        return -1 if found is None else found[0] - self._start

    def rfind(self, pattern) -> int:
        """Offset of the last match of `pattern`, or -1."""
        found = MatchDriver(self._data, pattern, self._start, self._end).next_span_back()
        return -1 if found is None else found[0] - self._start

    def count(self, pattern) -> int:
        driver = MatchDriver(self._data, pattern, self._start, self._end)
        total = 0
        while driver.next_span() is not None:
            total += 1
        return total

    # Splitting and matching

    def split(self, pattern) -> SplitIterator:
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end)
        return SplitIterator(driver, view._slice)

    def rsplit(self, pattern) -> SplitIterator:
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end)
        return SplitIterator(driver, view._slice, reverse=True)

    def split_terminator(self, pattern) -> SplitIterator:
        """Like `split`, but a trailing empty piece is dropped."""
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end, allow_trailing_empty=False)
        return SplitIterator(driver, view._slice)

    def rsplit_terminator(self, pattern) -> SplitIterator:
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end, allow_trailing_empty=False)
        return SplitIterator(driver, view._slice, reverse=True)

    def splitn(self, count: int, pattern) -> SplitNIterator:
        """At most `count` pieces from the front; the last one holds the rest of the string."""
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end)
        return SplitNIterator(driver, count, view._slice)

    def rsplitn(self, count: int, pattern) -> SplitNIterator:
        view = self._borrowed()
        driver = SplitDriver(view._data, _split_pattern(pattern), view._start, view._end)
        return SplitNIterator(driver, count, view._slice, reverse=True)

    def matches(self, pattern) -> MatchIterator:
        view = self._borrowed()
        return MatchIterator(MatchDriver(view._data, pattern, view._start, view._end), view._text)

    def rmatches(self, pattern) -> MatchIterator:
        view = self._borrowed()
        return MatchIterator(MatchDriver(view._data, pattern, view._start, view._end), view._text, reverse=True)

    def match_indices(self, pattern) -> MatchIterator:
        view = self._borrowed()
        return MatchIterator(MatchDriver(view._data, pattern, view._start, view._end), view._match)

    def rmatch_indices(self, pattern) -> MatchIterator:
        view = self._borrowed()
        return MatchIterator(MatchDriver(view._data, pattern, view._start, view._end), view._match, reverse=True)

    def utf8_sections(self) -> SectionIterator:
        view = self._borrowed()
        return SectionIterator(Utf8Sections(view._data, view._start, view._end), view._section)

    # Prefix helpers

    def _valid_prefix_end(self) -> int:
        span = Utf8Sections(self._data, self._start, self._end).next_span()
        if span is None or span[0] != self._start:
            return self._start
        return span[1]

    def remove_prefix(self, prefix: str) -> Optional["RawStr"]:
        """The rest of the string after `prefix`, or `None` if it does not start with it."""
        try:
            needle = self._encoding.from_str(prefix)
        except EncodingError:
            return None
        if not self._data.startswith(needle, self._start, self._end):
            return None
        view = self._borrowed()
        return view._slice(view._start + len(needle), view._end)

    def shift_char(self) -> Optional[Tuple[str, "RawStr"]]:
        """Splits off the first character, provided the string starts with valid UTF-8."""
        if self.is_empty():
            return None
        width = width_at(self._data, self._start, self._end)
        if not width:
            return None
        view = self._borrowed()
        return view._text(view._start, view._start + width), view._slice(view._start + width, view._end)

    def split_off(self, boundary: str) -> Optional[Tuple[str, "RawStr"]]:
        """
        Splits at the first `boundary` found in the valid UTF-8 prefix of the string.

        Returns the text before the boundary and the raw rest after it, or `None`
        when the prefix does not contain the boundary.
        """
        try:
            needle = boundary.encode("utf-8")
        except UnicodeEncodeError:
            return None
        position = self._data.find(needle, self._start, self._valid_prefix_end())
        if position < 0:
            return None
        view = self._borrowed()
        return view._text(view._start, position), view._slice(position + len(needle), view._end)

    # Joining

    def join(self, pieces: Iterable) -> "RawString":
        result = RawString(encoding=self._encoding)
        for index, piece in enumerate(pieces):
            if index:
                result.push(self)
            result.push(piece)
        return result


class RawString(RawStr):
    """
    Owned, mutable platform string.

    Unlike `RawStr` it is not hashable. `as_raw_str()` and every method that
    returns views or iterators pin the underlying `bytearray` until they are gone.
    """

    __slots__ = ()
    __hash__ = None

    def __init__(self, source=b"", encoding: EncodingLike = None):
        super().__init__(source, encoding)
        self._data = bytearray(self._data[self._start : self._end])
        self._start = 0
        self._end = len(self._data)
        self._pin = None

    @classmethod
    def from_wide(cls, units: Iterable[int], encoding: EncodingLike = None) -> "RawString":
        """Builds a string from 16-bit code units, unpaired surrogates included."""
        encoding = resolve_encoding(encoding)
        return cls(encoding.from_wide(units), encoding)

    def encode_wide(self) -> List[int]:
        return self._encoding.encode_wide(self._data, self._start, self._end)

    def _borrowed(self) -> RawStr:
        return RawStr._view(self._data, 0, len(self._data), self._encoding, memoryview(self._data))

    def as_raw_str(self) -> RawStr:
        return self._borrowed()

    def push(self, other) -> None:
        """Appends a `RawStr`, `str` or bytes-like raw representation."""
        data, start, end = _raw_parts(other, self._encoding)
        self._encoding.push(self._data, data, start, end)
        self._end = len(self._data)

    def clear(self) -> None:
        self._data.clear()
        self._end = 0

    def __iadd__(self, other) -> "RawString":
        self.push(other)
        return self


def concat(pieces: Iterable, encoding: EncodingLike = None) -> RawString:
    """Concatenates `RawStr`, `str` or bytes-like pieces into a new `RawString`."""
    result = RawString(encoding=encoding)
    for piece in pieces:
        result.push(piece)
    return result


__all__ = ["RawStr", "RawString", "concat"]
