"""
Byte-level UTF-8 helpers.

Validity follows the well-formed byte sequence table of the Unicode standard:
no overlong forms, no encoded surrogates and nothing above U+10FFFF.
Every helper works on absolute offsets into a `bytes` or `bytearray` object and
never looks outside the `[floor, limit)` window it is given.
"""

from typing import Union

Buffer = Union[bytes, bytearray]


def is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def width_at(data: Buffer, offset: int, limit: int) -> int:
    """Length of the well-formed character starting at `offset`, or 0 if there is none before `limit`."""
    lead = data[offset]
    if lead < 0x80:
        return 1
    if lead < 0xC2:
        return 0
    if lead < 0xE0:
        width, low, high = 2, 0x80, 0xBF
    elif lead < 0xF0:
        width = 3
        low, high = (0xA0, 0xBF) if lead == 0xE0 else (0x80, 0x9F) if lead == 0xED else (0x80, 0xBF)
    elif lead < 0xF5:
        width = 4
        low, high = (0x90, 0xBF) if lead == 0xF0 else (0x80, 0x8F) if lead == 0xF4 else (0x80, 0xBF)
    else:
        return 0

    if offset + width > limit:
        return 0
    if not low <= data[offset + 1] <= high:
        return 0
    for index in range(offset + 2, offset + width):
        if not is_continuation(data[index]):
            return 0
    return width


def width_ending_at(data: Buffer, end: int, floor: int) -> int:
    """Length of the well-formed character ending right before `end`, or 0 if there is none after `floor`.

    A continuation byte can only belong to the nearest lead byte before it, so the
    first non-continuation byte found walking backwards is the only candidate.
    """
    for width in range(1, 5):
        offset = end - width
        if offset < floor:
            break
        if not is_continuation(data[offset]):
            return width if width_at(data, offset, end) == width else 0
    return 0


def char_width(char: str) -> int:
    """Number of bytes `char` takes in UTF-8."""
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def is_encoded_surrogate(data: Buffer, offset: int, limit: int) -> bool:
    """Whether a generalized UTF-8 (WTF-8) encoding of a lone surrogate starts at `offset`."""
    return (
        offset + 3 <= limit
        and data[offset] == 0xED
        and 0xA0 <= data[offset + 1] <= 0xBF
        and is_continuation(data[offset + 2])
    )
