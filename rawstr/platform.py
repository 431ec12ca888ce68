"""
Platform encodings behind raw strings.

POSIX-like systems hand out arbitrary bytes, so the raw representation is the
bytes themselves. Systems with 16-bit native strings can hold unpaired surrogates,
which are kept in WTF-8: UTF-8 extended to encode lone surrogates. The search
machinery only ever looks for valid UTF-8, so under WTF-8 every encoded surrogate
is simply another invalid-byte boundary.

The strategy used by default is picked once, from the `RAWSTR_PLATFORM`
environment variable when it is set, and from `os.name` otherwise.
"""

import logging
import os
import struct
from typing import Dict, Final, Iterable, List, Optional, Union

from .errors import EncodingError
from .sections import Utf8Sections
from .utf8 import Buffer, is_encoded_surrogate

logger = logging.getLogger(__name__)

PLATFORM_VARIABLE: Final[str] = "RAWSTR_PLATFORM"

REPLACEMENT_CHARACTER: Final[str] = "�"


class Encoding:
    """Interface of a platform encoding; every method works on `data[start:end]`."""

    name: str = ""

    def from_str(self, text: str) -> bytes:
        raise NotImplementedError

    def from_bytes(self, data: Buffer) -> Optional[bytes]:
        raise NotImplementedError

    def to_str(self, data: Buffer, start: int, end: int) -> Optional[str]:
        try:
            return data[start:end].decode("utf-8")
        except UnicodeDecodeError:
            return None

    def to_str_lossy(self, data: Buffer, start: int, end: int) -> str:
        raise NotImplementedError

    def to_bytes(self, data: Buffer, start: int, end: int) -> Optional[bytes]:
        raise NotImplementedError

    def to_os_str(self, data: Buffer, start: int, end: int) -> str:
        raise NotImplementedError

    def push(self, buffer: bytearray, data: Buffer, start: int, end: int) -> None:
        buffer += data[start:end]

    def from_wide(self, units: Iterable[int]) -> bytes:
        raise EncodingError(f"The {self.name} encoding has no 16-bit representation")

    def encode_wide(self, data: Buffer, start: int, end: int) -> List[int]:
        raise EncodingError(f"The {self.name} encoding has no 16-bit representation")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class PosixEncoding(Encoding):
    """Arbitrary bytes; text round-trips through `surrogateescape`, like `os.fsencode` on UTF-8 systems."""

    name = "posix"

    def from_str(self, text: str) -> bytes:
        try:
            return text.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError as error:
            raise EncodingError(f"{text[error.start : error.end]!r} has no byte representation on POSIX") from None

    def from_bytes(self, data: Buffer) -> Optional[bytes]:
        return bytes(data)

    def to_str_lossy(self, data: Buffer, start: int, end: int) -> str:
        # The codec substitutes maximal invalid subparts, as recommended by Unicode
        return data[start:end].decode("utf-8", "replace")

    def to_bytes(self, data: Buffer, start: int, end: int) -> Optional[bytes]:
        return bytes(data[start:end])

    def to_os_str(self, data: Buffer, start: int, end: int) -> str:
        return data[start:end].decode("utf-8", "surrogateescape")


def _surrogate_value(data: Buffer, offset: int) -> int:
    return ((data[offset] & 0x0F) << 12) | ((data[offset + 1] & 0x3F) << 6) | (data[offset + 2] & 0x3F)


def _replace_surrogates(data: Buffer, start: int, end: int) -> str:
    """Lossy text for bytes between sections: one U+FFFD per encoded surrogate."""
    pieces = []
    run = position = start
    while position < end:
        if is_encoded_surrogate(data, position, end):
            if run < position:
                pieces.append(data[run:position].decode("utf-8", "replace"))
            pieces.append(REPLACEMENT_CHARACTER)
            position += 3
            run = position
        else:
            position += 1
    if run < end:
        pieces.append(data[run:end].decode("utf-8", "replace"))
    return "".join(pieces)


class Wtf8Encoding(Encoding):
    """
    WTF-8, the representation of 16-bit native strings.

    Only valid UTF-8 converts to or from plain bytes. Surrogate pairs are always
    stored as the supplementary character they form, lone surrogates as their
    three-byte generalized UTF-8 form.
    """

    name = "wtf8"

    def from_str(self, text: str) -> bytes:
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError:
            # Round-tripping through UTF-16 joins any surrogate pairs the string carries
            joined = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
            return joined.encode("utf-8", "surrogatepass")

    def from_bytes(self, data: Buffer) -> Optional[bytes]:
        if self.to_str(data, 0, len(data)) is None:
            return None
        return bytes(data)

    def to_str_lossy(self, data: Buffer, start: int, end: int) -> str:
        pieces = []
        position = start
        sections = Utf8Sections(data, start, end)
        span = sections.next_span()
        while span is not None:
            if position < span[0]:
                pieces.append(_replace_surrogates(data, position, span[0]))
            pieces.append(data[span[0] : span[1]].decode("utf-8"))
            position = span[1]
            span = sections.next_span()
        if position < end:
            pieces.append(_replace_surrogates(data, position, end))
        return "".join(pieces)

    def to_bytes(self, data: Buffer, start: int, end: int) -> Optional[bytes]:
        if self.to_str(data, start, end) is None:
            return None
        return bytes(data[start:end])

    def to_os_str(self, data: Buffer, start: int, end: int) -> str:
        return data[start:end].decode("utf-8", "surrogatepass")

    def push(self, buffer: bytearray, data: Buffer, start: int, end: int) -> None:
        # A trailing high surrogate followed by a leading low surrogate must become one character
        if (
            len(buffer) >= 3
            and is_encoded_surrogate(buffer, len(buffer) - 3, len(buffer))
            and buffer[-2] < 0xB0
            and is_encoded_surrogate(data, start, end)
            and data[start + 1] >= 0xB0
        ):
            high = _surrogate_value(buffer, len(buffer) - 3)
            low = _surrogate_value(data, start)
            code = 0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)
            buffer[-3:] = chr(code).encode("utf-8")
            start += 3
        buffer += data[start:end]

    def from_wide(self, units: Iterable[int]) -> bytes:
        units = list(units)
        raw = struct.pack(f"<{len(units)}H", *units)
        return raw.decode("utf-16-le", "surrogatepass").encode("utf-8", "surrogatepass")

    def encode_wide(self, data: Buffer, start: int, end: int) -> List[int]:
        raw = self.to_os_str(data, start, end).encode("utf-16-le", "surrogatepass")
        return list(struct.unpack(f"<{len(raw) // 2}H", raw))


POSIX: Final[Encoding] = PosixEncoding()
WTF8: Final[Encoding] = Wtf8Encoding()

_ENCODINGS: Final[Dict[str, Encoding]] = {
    "posix": POSIX,
    "unix": POSIX,
    "wtf8": WTF8,
    "windows": WTF8,
}

_default_encoding: Optional[Encoding] = None


def get_encoding(name: Optional[str] = None) -> Encoding:
    """Looks up an encoding by name; `None` stands for the process-wide default."""
    if name is None:
        return default_encoding()
    try:
        return _ENCODINGS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown platform encoding {name!r}, expected one of {sorted(_ENCODINGS)}") from None


def _detect_encoding_name() -> str:
    name = os.environ.get(PLATFORM_VARIABLE)
    if name:
        logger.debug("Platform encoding %r requested through %s", name, PLATFORM_VARIABLE)
        return name
    return "wtf8" if os.name == "nt" else "posix"


def default_encoding() -> Encoding:
    global _default_encoding
    if _default_encoding is None:
        _default_encoding = get_encoding(_detect_encoding_name())
        logger.debug("Using the %s encoding for raw strings", _default_encoding.name)
    return _default_encoding


def set_default_encoding(encoding: Union[str, Encoding, None]) -> Optional[Encoding]:
    """Overrides the process-wide default; `None` restores detection on next use. Returns the previous value."""
    global _default_encoding
    previous = _default_encoding
    _default_encoding = None if encoding is None else resolve_encoding(encoding)
    logger.debug("Default raw string encoding set to %r", _default_encoding)
    return previous


def resolve_encoding(encoding: Union[str, Encoding, None]) -> Encoding:
    if encoding is None:
        return default_encoding()
    if isinstance(encoding, Encoding):
        return encoding
    return get_encoding(encoding)


__all__ = [
    "Encoding",
    "PosixEncoding",
    "Wtf8Encoding",
    "POSIX",
    "WTF8",
    "PLATFORM_VARIABLE",
    "get_encoding",
    "default_encoding",
    "set_default_encoding",
    "resolve_encoding",
]
