"""
Match and split drivers over the UTF-8 sections of a byte buffer.

`MatchDriver` runs one search engine per section and reports matches in the
coordinates of the whole buffer, from the front, from the back, or both. The two
cursors share the partitioner; when it runs dry from one side, the cursors have
met on the last section and continue on a single shared engine, so whichever
direction exhausts it first ends the stream for both.

`SplitDriver` turns that match stream into the pieces between matches. Pieces
cover the whole buffer, invalid bytes included, while the matches themselves
always lie inside a single section.
"""

import copy
import enum
from typing import Callable, NamedTuple, Optional, TypeVar

from .patterns import Searcher, Span, as_pattern
from .sections import Utf8Sections
from .utf8 import Buffer

T = TypeVar("T")


class Match(NamedTuple):
    """A match and its byte offset within the searched buffer."""

    offset: int
    text: str


class Phase(enum.Enum):
    SEPARATE = "separate"
    CONVERGED = "converged"


class MatchDriver:
    """
    Bidirectional stream of matches of `pattern` inside `data[start:end]`.

    `next_span()` and `next_span_back()` return absolute `(start, end)` byte spans,
    or `None` once the stream is exhausted. Calls may be interleaved freely.
    """

    def __init__(self, data: Buffer, pattern, start: int = 0, end: Optional[int] = None):
        self._data = data
        self._pattern = as_pattern(pattern)
        self._sections = Utf8Sections(data, start, end)
        self._phase = Phase.SEPARATE
        self._front: Optional[Searcher] = None
        self._back: Optional[Searcher] = None
        self._shared: Optional[Searcher] = None

    @property
    def phase(self) -> Phase:
        return self._phase

    def next_span(self) -> Optional[Span]:
        while self._phase is Phase.SEPARATE:
            if self._front is None:
                span = self._sections.next_span()
                if span is None:
                    self._converge(self._back)
                    break
                self._front = self._pattern.searcher(self._data, *span)

            found = self._front.next_match()
            if found is not None:
                return found
            self._front = None

        if self._shared is None:
            return None
        return self._shared.next_match()

    def next_span_back(self) -> Optional[Span]:
        while self._phase is Phase.SEPARATE:
            if self._back is None:
                span = self._sections.next_span_back()
                if span is None:
                    self._converge(self._front)
                    break
                self._back = self._pattern.searcher(self._data, *span)

            found = self._back.next_match_back()
            if found is not None:
                return found
            self._back = None

        if self._shared is None:
            return None
        return self._shared.next_match_back()

    def _converge(self, searcher: Optional[Searcher]) -> None:
        # Only the other cursor's engine, if any, still has matches left
        self._phase = Phase.CONVERGED
        self._shared = searcher
        self._front = self._back = None

    def __copy__(self) -> "MatchDriver":
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._sections = copy.copy(self._sections)
        clone._front = copy.copy(self._front)
        clone._back = copy.copy(self._back)
        clone._shared = copy.copy(self._shared)
        return clone


class SplitDriver:
    """
    Bidirectional stream of the pieces of `data[start:end]` between matches of `pattern`.

    The unconsumed middle of the buffer is tracked as `[low, high)`. Emitting the
    final piece sets `low = high + 1`, so the next call reports exhaustion instead
    of producing a spurious empty piece.

    With `allow_trailing_empty=False` an empty last piece is dropped, which gives
    the terminator flavour of splitting.
    """

    def __init__(
        self,
        data: Buffer,
        pattern,
        start: int = 0,
        end: Optional[int] = None,
        allow_trailing_empty: bool = True,
    ):
        end = len(data) if end is None else end
        self._matches = MatchDriver(data, pattern, start, end)
        self._low = start
        self._high = end
        self._allow_trailing_empty = allow_trailing_empty

    @property
    def finished(self) -> bool:
        return self._high < self._low

    def next_span(self) -> Optional[Span]:
        if self.finished:
            return None
        found = self._matches.next_span()
        if found is None:
            return self.remainder()
        piece = self._low, found[0]
        self._low = found[1]
        return piece

    def next_span_back(self) -> Optional[Span]:
        if self.finished:
            return None
        if not self._allow_trailing_empty:
            self._allow_trailing_empty = True
            piece = self.next_span_back()
            if piece is not None and piece[0] != piece[1]:
                return piece
            if self.finished:
                return None

        found = self._matches.next_span_back()
        if found is None:
            return self.remainder()
        piece = found[1], self._high
        self._high = found[0]
        return piece

    def remainder(self) -> Optional[Span]:
        """Emits everything between the pieces already produced from either end."""
        if self.finished:
            return None
        piece = self._low, self._high
        self._low = self._high + 1
        if piece[0] == piece[1] and not self._allow_trailing_empty:
            return None
        return piece

    def __copy__(self) -> "SplitDriver":
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._matches = copy.copy(self._matches)
        return clone


class _CloneableIterator:
    def __iter__(self):
        return self

    def copy(self):
        """Independent iterator continuing from the current position."""
        return copy.copy(self)

    def __copy__(self):
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._driver = copy.copy(self._driver)
        return clone


class DirectionalIterator(_CloneableIterator):
    """
    Iterates a driver from the front, or from the back with `reverse=True`.

    `next_back()` pulls from the opposite end, `reversed()` returns an independent
    copy running in the other direction. `wrap(start, end)` turns a byte span into
    the yielded item.
    """

    def __init__(self, driver, wrap: Callable[[int, int], T], reverse: bool = False):
        self._driver = driver
        self._wrap = wrap
        self._reverse = reverse

    def __next__(self):
        return self._pull(self._reverse)

    def next_back(self):
        return self._pull(not self._reverse)

    def _pull(self, from_back: bool):
        span = self._driver.next_span_back() if from_back else self._driver.next_span()
        if span is None:
            raise StopIteration
        return self._wrap(*span)

    def __reversed__(self):
        clone = self.copy()
        clone._reverse = not self._reverse
        return clone


class SplitIterator(DirectionalIterator):
    """Pieces of a buffer between matches, as views of the original buffer."""

    pass


class MatchIterator(DirectionalIterator):
    """Matched text, or `Match` tuples when the offsets were requested."""

    pass


class SectionIterator(DirectionalIterator):
    """Valid UTF-8 sections of a buffer, as `Section` tuples."""

    pass


class SplitNIterator(_CloneableIterator):
    """At most `count` pieces; the last one holds everything not yet split off."""

    def __init__(self, driver: SplitDriver, count: int, wrap: Callable[[int, int], T], reverse: bool = False):
        if count < 0:
            raise ValueError(f"The number of pieces must be non-negative, got {count}")
        self._driver = driver
        self._count = count
        self._wrap = wrap
        self._reverse = reverse

    def __next__(self):
        if self._count == 0:
            raise StopIteration
        if self._count == 1:
            self._count = 0
            span = self._driver.remainder()
        else:
            self._count -= 1
            span = self._driver.next_span_back() if self._reverse else self._driver.next_span()
        if span is None:
            raise StopIteration
        return self._wrap(*span)


__all__ = [
    "Match",
    "Phase",
    "MatchDriver",
    "SplitDriver",
    "DirectionalIterator",
    "SplitIterator",
    "MatchIterator",
    "SectionIterator",
    "SplitNIterator",
]
