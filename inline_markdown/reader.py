"""Rewindable cursors over a document and over its tokens."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


class CharReader:
    """Sequential, rewindable access to the code points of a document.

    The position is the index of the next code point to read. Reading past
    the end keeps advancing the position so that `go_back` undoes exactly one
    `next` call, including the call that returned None.

    Examples:
        reader = CharReader("hi")
        reader.next()  # "h"
        reader.go_back()
        reader.next()  # "h"
        reader.next()  # "i"
        reader.next()  # None
    """

    def __init__(self, document: str):
        self._document = document
        self._position = 0

    @property
    def position(self) -> int:
        """Raw position: the number of `next` calls not undone by `go_back`."""
        return self._position

    def next(self) -> str | None:
        """Return the current code point, or None past the end, then advance."""
        char = self._document[self._position] if self._position < len(self._document) else None
        self._position += 1
        return char

    def go_back(self) -> None:
        """Step back one position; stays at 0 when already there."""
        if self._position > 0:
            self._position -= 1

    def peek_ahead(self, count: int) -> str | None:
        """Return the next `count` code points without consuming them.

        Args:
            count: Number of code points to look at.

        Returns:
            str | None: The code points, or None when fewer than `count`
                remain.

        Examples:
            CharReader("hello world!").peek_ahead(5)  # "hello"
        """
        end = self._position + count
        if end > len(self._document):
            return None
        return self._document[self._position : end]

    def slice(self, start: int, end: int) -> str:
        return self._document[start:end]

    def __len__(self) -> int:
        return len(self._document)


class TokenReader(Generic[T]):
    """Sequential, rewindable access to a materialized sequence.

    Unlike `CharReader`, the position never moves past the end, so a single
    `go_back` after exhaustion returns to the last element.

    Examples:
        reader = TokenReader([1, 2])
        reader.next()  # 1
        reader.go_back()
        reader.next()  # 1
    """

    def __init__(self, items: Sequence[T]):
        self._items = items
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def next(self) -> T | None:
        """Return the current item, or None when exhausted, and advance."""
        if self._position >= len(self._items):
            return None
        item = self._items[self._position]
        self._position += 1
        return item

    def peek(self) -> T | None:
        if self._position >= len(self._items):
            return None
        return self._items[self._position]

    def go_back(self) -> None:
        if self._position > 0:
            self._position -= 1

    def __len__(self) -> int:
        return len(self._items)
