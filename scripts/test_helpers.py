"""
Shared baselines and random input generators for RawStr tests.

The baselines are deliberately naive: they lean on the `str` methods of decoded
sections and on the strict UTF-8 codec, so they can be trusted to disagree with
the library whenever the library gets an offset wrong.
"""

from random import choice, randint
from typing import List, Sequence, Tuple, Union

# Valid characters of every encoded width, plus separators used by the tests
VALID_FRAGMENTS: List[str] = ["a", "b", ",", " ", "\n", "é", "€", "😀"]

# Invalid on their own; some become valid next to each other, which is intended
INVALID_FRAGMENTS: List[bytes] = [
    b"\xff",  # never valid
    b"\x80",  # stray continuation byte
    b"\xc3",  # truncated two-byte sequence
    b"\xe2\x82",  # truncated three-byte sequence
    b"\xf0\x9f\x98",  # truncated four-byte sequence
    b"\xc0\xaf",  # overlong slash
    b"\xed\xa0\x80",  # encoded high surrogate
    b"\xf4\x90\x80\x80",  # above U+10FFFF
]


def get_random_raw_bytes(length: int, invalid_ratio: float = 0.2) -> bytes:
    """Concatenates `length` random fragments, roughly `invalid_ratio` of them invalid."""
    fragments: List[Union[str, bytes]] = []
    for _ in range(length):
        if randint(0, 99) < invalid_ratio * 100:
            fragments.append(choice(INVALID_FRAGMENTS))
        else:
            fragments.append(choice(VALID_FRAGMENTS).encode("utf-8"))
    return b"".join(fragments)


def baseline_sections(data: bytes) -> List[Tuple[int, str]]:
    """Maximal valid UTF-8 runs as `(offset, text)` pairs, found by the strict codec."""
    sections = []
    position = 0
    while position < len(data):
        try:
            text = data[position:].decode("utf-8")
        except UnicodeDecodeError as error:
            if error.start:
                sections.append((position, data[position : position + error.start].decode("utf-8")))
            position += error.end
        else:
            sections.append((position, text))
            break
    return sections


def baseline_match_indices(data: bytes, needle: str) -> List[Tuple[int, str]]:
    """Leftmost non-overlapping occurrences of a non-empty `needle` within each section."""
    matches = []
    for offset, text in baseline_sections(data):
        index = text.find(needle)
        while index >= 0:
            matches.append((offset + len(text[:index].encode("utf-8")), needle))
            index = text.find(needle, index + len(needle))
    return matches


def baseline_split(data: bytes, needle: str) -> List[bytes]:
    """Pieces between the matches of `baseline_match_indices`, invalid bytes included."""
    pieces = []
    low = 0
    for offset, text in baseline_match_indices(data, needle):
        pieces.append(data[low:offset])
        low = offset + len(text.encode("utf-8"))
    pieces.append(data[low:])
    return pieces


def baseline_char_count(data: bytes) -> int:
    """Characters of the valid sections plus one per invalid byte."""
    sections = baseline_sections(data)
    valid_bytes = sum(len(text.encode("utf-8")) for _, text in sections)
    return sum(len(text) for _, text in sections) + len(data) - valid_bytes


def interleave(iterator, choices: Sequence[bool]) -> Tuple[list, list]:
    """Pulls from the front on `True` and from the back on `False`, then drains the rest from the front."""
    front, back = [], []
    for from_front in choices:
        try:
            if from_front:
                front.append(next(iterator))
            else:
                back.append(iterator.next_back())
        except StopIteration:
            break
    else:
        front.extend(iterator)
    return front, back
