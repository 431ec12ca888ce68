"""
Section partitioner: splits a byte buffer into maximal runs of valid UTF-8.

Sections are produced lazily from both ends. The front cursor only ever moves
forward and the back cursor only backward, and neither looks past the other, so
interleaving `next()` and `next_back()` never yields the same byte range twice.
"""

import codecs
from typing import NamedTuple, Optional, Tuple

from .utf8 import Buffer, width_ending_at

Span = Tuple[int, int]

# Forward scans hand the decoder bounded windows, so a failed decode never copies more than this
_WINDOW = 4096


class Section(NamedTuple):
    """A maximal run of valid UTF-8 and its byte offset within the buffer."""

    offset: int
    text: str

    @property
    def end(self) -> int:
        return self.offset + len(self.text.encode("utf-8"))


def _scan_forward(data: Buffer, start: int, limit: int) -> Span:
    """Returns the end of the valid run at `start` and the end of the invalid bytes right after it."""
    position = start
    with memoryview(data) as view:
        while position < limit:
            window_end = min(limit, position + _WINDOW)
            chunk = view[position:window_end]
            try:
                _, consumed = codecs.utf_8_decode(chunk, "strict", window_end == limit)
            except UnicodeDecodeError as error:
                return position + error.start, position + error.end
            finally:
                chunk.release()
            position += consumed
    return limit, limit


class Utf8Sections:
    """
    Bidirectional iterator over the valid UTF-8 sections of `data[start:end]`.

    Iterating yields `Section` tuples front to back, `next_back()` yields them back
    to front. Offsets are relative to `start`. The `*_span` methods return absolute
    `(start, end)` byte spans instead and skip decoding.
    """

    def __init__(self, data: Buffer, start: int = 0, end: Optional[int] = None):
        self._data = data
        self._origin = start
        self._front = start
        self._back = len(data) if end is None else end

    def __iter__(self):
        return self

    def __next__(self) -> Section:
        span = self.next_span()
        if span is None:
            raise StopIteration
        return self._section(span)

    def next_back(self) -> Section:
        span = self.next_span_back()
        if span is None:
            raise StopIteration
        return self._section(span)

    def next_span(self) -> Optional[Span]:
        data, limit = self._data, self._back
        position = self._front
        while position < limit:
            valid_end, skip_end = _scan_forward(data, position, limit)
            if valid_end > position:
                self._front = valid_end
                return position, valid_end
            position = skip_end
        self._front = limit
        return None

    def next_span_back(self) -> Optional[Span]:
        data, floor = self._data, self._front
        end = self._back
        while end > floor:
            width = width_ending_at(data, end, floor)
            if width:
                break
            end -= 1
        else:
            self._back = floor
            return None

        start = end - width
        while start > floor:
            width = width_ending_at(data, start, floor)
            if not width:
                break
            start -= width
        self._back = start
        return start, end

    def _section(self, span: Span) -> Section:
        start, end = span
        return Section(start - self._origin, self._data[start:end].decode("utf-8"))
