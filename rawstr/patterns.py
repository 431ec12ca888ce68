"""
Textual patterns and the search engines they bind to a single UTF-8 section.

A pattern is bound to a section span with `searcher(data, start, end)`. The
engine reports absolute `(start, end)` byte spans of its matches from the front
(`next_match`) or the back (`next_match_back`). Both directions narrow the same
`[low, high)` window, so one engine can be shared by two cursors meeting in the
middle without reporting a match twice.
"""

from typing import Callable, Iterable, Optional, Tuple

from .utf8 import Buffer, char_width, width_at, width_ending_at

Span = Tuple[int, int]


class Searcher:
    """Stateful search over one section span; returns absolute byte spans or `None`."""

    def __init__(self, data: Buffer, start: int, end: int):
        self._data = data
        self._low = start
        self._high = end

    def next_match(self) -> Optional[Span]:
        raise NotImplementedError

    def next_match_back(self) -> Optional[Span]:
        raise NotImplementedError


class Pattern:
    """Base class for everything that can be searched for inside valid UTF-8 text."""

    #: Whether the pattern can produce zero-width matches.
    matches_empty = False

    def searcher(self, data: Buffer, start: int, end: int) -> Searcher:
        raise NotImplementedError

    def is_prefix_of(self, data: Buffer, start: int, end: int) -> bool:
        raise NotImplementedError

    def is_suffix_of(self, data: Buffer, start: int, end: int) -> bool:
        raise NotImplementedError


class LiteralSearcher(Searcher):
    def __init__(self, data: Buffer, start: int, end: int, needle: bytes):
        super().__init__(data, start, end)
        self._needle = needle

    def next_match(self) -> Optional[Span]:
        found = self._data.find(self._needle, self._low, self._high)
        if found < 0:
            self._low = self._high
            return None
        self._low = found + len(self._needle)
        return found, self._low

    def next_match_back(self) -> Optional[Span]:
        found = self._data.rfind(self._needle, self._low, self._high)
        if found < 0:
            self._high = self._low
            return None
        self._high = found
        return found, found + len(self._needle)


class NeverSearcher(Searcher):
    """Bound by patterns that cannot occur in valid UTF-8 at all."""

    def next_match(self) -> Optional[Span]:
        return None

    def next_match_back(self) -> Optional[Span]:
        return None


class EmptySearcher(Searcher):
    """Zero-width matches at every character boundary of the section, both ends included."""

    def next_match(self) -> Optional[Span]:
        position = self._low
        if self._high < position:
            return None
        if position == self._high:
            self._low = position + 1
        else:
            self._low = position + (width_at(self._data, position, self._high) or 1)
        return position, position

    def next_match_back(self) -> Optional[Span]:
        position = self._high
        if position < self._low:
            return None
        if position == self._low:
            self._high = position - 1
        else:
            self._high = position - (width_ending_at(self._data, position, self._low) or 1)
        return position, position


class PredicateSearcher(Searcher):
    """Tests one character at a time; the section is decoded once, when the engine is bound."""

    def __init__(self, data: Buffer, start: int, end: int, predicate: Callable[[str], bool]):
        super().__init__(data, start, end)
        self._predicate = predicate
        self._text = data[start:end].decode("utf-8")
        self._first = 0
        self._last = len(self._text)

    def next_match(self) -> Optional[Span]:
        text, predicate = self._text, self._predicate
        while self._first < self._last:
            char = text[self._first]
            start = self._low
            self._first += 1
            self._low += char_width(char)
            if predicate(char):
                return start, self._low
        return None

    def next_match_back(self) -> Optional[Span]:
        text, predicate = self._text, self._predicate
        while self._first < self._last:
            self._last -= 1
            char = text[self._last]
            end = self._high
            self._high -= char_width(char)
            if predicate(char):
                return self._high, end
        return None


class LiteralPattern(Pattern):
    """A literal piece of text; a one-character literal is the "char" pattern."""

    def __init__(self, literal: str):
        self.literal = literal
        try:
            self.needle: Optional[bytes] = literal.encode("utf-8")
        except UnicodeEncodeError:
            # Lone surrogates, never found in a section
            self.needle = None
        self.matches_empty = not literal

    def searcher(self, data: Buffer, start: int, end: int) -> Searcher:
        if self.needle is None:
            return NeverSearcher(data, start, end)
        if not self.needle:
            return EmptySearcher(data, start, end)
        return LiteralSearcher(data, start, end, self.needle)

    def is_prefix_of(self, data: Buffer, start: int, end: int) -> bool:
        return self.needle is not None and data.startswith(self.needle, start, end)

    def is_suffix_of(self, data: Buffer, start: int, end: int) -> bool:
        return self.needle is not None and data.endswith(self.needle, start, end)

    def __repr__(self) -> str:
        return f"LiteralPattern({self.literal!r})"


class PredicatePattern(Pattern):
    """Matches every single character for which `predicate(char)` is true."""

    def __init__(self, predicate: Callable[[str], bool]):
        self.predicate = predicate

    def searcher(self, data: Buffer, start: int, end: int) -> Searcher:
        return PredicateSearcher(data, start, end, self.predicate)

    def is_prefix_of(self, data: Buffer, start: int, end: int) -> bool:
        if start >= end:
            return False
        width = width_at(data, start, end)
        return bool(width) and bool(self.predicate(data[start : start + width].decode("utf-8")))

    def is_suffix_of(self, data: Buffer, start: int, end: int) -> bool:
        if start >= end:
            return False
        width = width_ending_at(data, end, start)
        return bool(width) and bool(self.predicate(data[end - width : end].decode("utf-8")))

    def __repr__(self) -> str:
        return f"PredicatePattern({self.predicate!r})"


class CharSetPattern(PredicatePattern):
    """Matches any single character out of a set."""

    def __init__(self, chars: Iterable[str]):
        self.chars = frozenset(chars)
        for char in self.chars:
            if not isinstance(char, str) or len(char) != 1:
                raise TypeError(f"Character sets must hold single characters, got {char!r}")
        super().__init__(self.chars.__contains__)

    def __repr__(self) -> str:
        return f"CharSetPattern({''.join(sorted(self.chars))!r})"


def as_pattern(pattern) -> Pattern:
    """Coerces strings, character collections and predicates into a `Pattern`."""
    if isinstance(pattern, Pattern):
        return pattern
    if isinstance(pattern, str):
        return LiteralPattern(pattern)
    if isinstance(pattern, (set, frozenset, list, tuple)):
        return CharSetPattern(pattern)
    if callable(pattern):
        return PredicatePattern(pattern)
    raise TypeError(f"Expected a str, a collection of characters or a predicate, got {type(pattern).__name__}")


__all__ = [
    "Pattern",
    "Searcher",
    "LiteralPattern",
    "PredicatePattern",
    "CharSetPattern",
    "as_pattern",
]
