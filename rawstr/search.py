"""
Existence search over raw bytes.

Unlike the pattern matchers, these helpers ignore UTF-8 validity entirely: a needle
may start or end inside an invalid run, or even inside a multi-byte character.
"""

from typing import Iterator, Optional

from .utf8 import Buffer


def find_raw(haystack: Buffer, needle: Buffer, start: int = 0, end: Optional[int] = None) -> int:
    """Offset of the first occurrence of `needle` in `haystack[start:end]`, or -1.

    Args:
        haystack (bytes or bytearray): The bytes object to search within.
        needle (bytes or bytearray): The bytes to search for. An empty needle matches at `start`.
        start (int): Absolute offset to start searching from.
        end (int, optional): Absolute offset to stop searching at. Defaults to the end of `haystack`.

    Returns:
        int: Absolute offset of the occurrence, or -1 if there is none.
    """
    end = len(haystack) if end is None else end
    if not needle:
        return start if start <= end else -1
    return haystack.find(needle, start, end)


def find_all_raw(haystack: Buffer, needle: Buffer, start: int = 0, end: Optional[int] = None) -> Iterator[int]:
    """Yields the absolute offset of every occurrence of `needle`, overlapping ones included."""
    end = len(haystack) if end is None else end
    position = find_raw(haystack, needle, start, end)
    while position >= 0:
        yield position
        position = find_raw(haystack, needle, position + 1, end)


def contains_raw(haystack: Buffer, needle: Buffer, start: int = 0, end: Optional[int] = None) -> bool:
    """Whether `needle` occurs as a contiguous run of bytes in `haystack[start:end]`."""
    return find_raw(haystack, needle, start, end) >= 0
