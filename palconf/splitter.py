"""Top-level comma splitting and escape handling for array values.

A plain ``str.split(",")`` is not enough for array values because tagged
union items carry their own comma separated payloads::

    tokens    int(42), add(1,2), pow(2,3)

Commas inside ``(...)`` groups and commas preceded by a backslash do not
split. Escapes are only resolved item by item through ``unescape``.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

DELIMITER = ","
ESCAPE = "\\"
WHITESPACES = " \t"
NEWLINES = "\r\n"


class RawArrayIterator:
    """Lazy, restartable iterator over the top-level items of a raw array.

    Parenthesis nesting is counted, not matched, and is never validated: an
    unbalanced ``)`` simply drives the counter negative, which suppresses
    splitting for the rest of the input.

    Attributes:
        buffer: The raw text being split.
        index: Offset where the next item starts.
    """

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self.index = 0
        self._exhausted = not buffer

    def next_index(self) -> Optional[int]:
        """Advance past the next item and return its end offset.

        Returns:
            Offset one past the last character of the item, or None when the
            iterator is exhausted.
        """
        if self._exhausted:
            return None

        unclosed = 0
        i = self.index
        while i < len(self.buffer):
            c = self.buffer[i]
            if c == "(":
                unclosed += 1
            elif c == ")":
                unclosed -= 1
            elif c == DELIMITER and unclosed == 0:
                if i == 0 or self.buffer[i - 1] != ESCAPE:
                    self.index = i + 1
                    return i
            i += 1

        self.index = len(self.buffer)
        self._exhausted = True
        return len(self.buffer)

    def next(self) -> Optional[str]:
        """Return the next raw item, or None when exhausted."""
        start = self.index
        end = self.next_index()
        if end is None:
            return None
        return self.buffer[start:end]

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        item = self.next()
        if item is None:
            raise StopIteration
        return item

    def count(self) -> int:
        """Count the remaining items without consuming them."""
        index, exhausted = self.index, self._exhausted
        n_items = 0
        while self.next_index() is not None:
            n_items += 1
        self.index, self._exhausted = index, exhausted
        return n_items

    def reset(self) -> None:
        """Restart iteration from the beginning of the buffer."""
        self.index = 0
        self._exhausted = not self.buffer


def split_raw_array(raw: str) -> RawArrayIterator:
    """Split ``raw`` into its top-level comma separated items.

    Args:
        raw: Raw array text, usually already trimmed.

    Returns:
        RawArrayIterator over the items. An empty string has no items; a
        trailing comma produces a trailing empty item.
    """
    return RawArrayIterator(raw)


def unescape(raw: str) -> str:
    """Resolve ``\\,`` to ``,`` and ``\\\\`` to ``\\`` in a raw item.

    Only the delimiter and the escape character itself can be escaped. A
    backslash before any other character is kept along with that character.

    Args:
        raw: A single raw array item.

    Returns:
        The unescaped item.
    """
    buffer: List[str] = []
    lastc = ""

    for c in raw:
        if lastc == ESCAPE:
            if c != ESCAPE and c != DELIMITER:
                buffer.append(ESCAPE)
            buffer.append(c)
            lastc = ""
            continue
        if c != ESCAPE:
            buffer.append(c)
        lastc = c

    return "".join(buffer)


__all__ = [
    "DELIMITER",
    "ESCAPE",
    "WHITESPACES",
    "NEWLINES",
    "RawArrayIterator",
    "split_raw_array",
    "unescape",
]
