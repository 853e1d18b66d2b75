"""Position-tracking view over an immutable field value.

What:
  Provide :class:`Cursor`, the offset-carrying handle every grammar layer
  receives. It exposes the unconsumed bytes and a handful of consuming reads.

Why:
  Speculative parsing needs a cheap way to remember "where was I" and retry a
  different production from the same spot. Sharing the immutable ``bytes``
  object and copying only the integer offset makes that free.

How:
  The cursor stores the original ``bytes`` and an integer offset. ``clone``
  builds a new cursor over the same data. Reads advance the offset and raise
  :class:`~imfparse.core.errors.EofError` when the requested extent does not
  exist, leaving the offset untouched.

Interfaces:
  :class:`Cursor`.

Invariants & Safety:
  - ``0 <= position <= len(data)`` at all times; setters reject anything else.
  - ``data`` is never modified; grammar functions index into it directly and
    never slice more than they consume.
"""
from __future__ import annotations

from typing import Callable, Optional, Union

from .errors import EofError


class Cursor:
    """Offset into an immutable byte sequence."""

    __slots__ = ("_data", "_position")

    def __init__(self, data: Union[bytes, bytearray, memoryview], position: int = 0) -> None:
        self._data = bytes(data)
        self._position = 0
        self.set_position(position)

    def __repr__(self) -> str:
        return f"Cursor(position={self._position}, remaining={self.remaining()!r})"

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self.set_position(value)

    def set_position(self, position: int) -> None:
        if position < 0 or position > len(self._data):
            raise ValueError(
                f"position {position} outside of buffer of length {len(self._data)}"
            )
        self._position = position

    def advance_by(self, count: int) -> None:
        self.set_position(self._position + count)

    def clone(self) -> "Cursor":
        twin = Cursor.__new__(Cursor)
        twin._data = self._data
        twin._position = self._position
        return twin

    def remaining(self) -> bytes:
        return self._data[self._position :]

    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def peek(self, offset: int = 0) -> Optional[int]:
        """Return the byte ``offset`` positions ahead, or ``None`` past the end."""

        index = self._position + offset
        if index < len(self._data):
            return self._data[index]
        return None

    def read(self, count: int) -> bytes:
        end = self._position + count
        if end > len(self._data):
            raise EofError(len(self._data))
        chunk = self._data[self._position : end]
        self._position = end
        return chunk

    def read_until(self, byte: int) -> bytes:
        """Consume up to, not including, the next ``byte``."""

        index = self._data.find(bytes((byte,)), self._position)
        if index < 0:
            raise EofError(len(self._data))
        chunk = self._data[self._position : index]
        self._position = index
        return chunk

    def read_while(self, predicate: Callable[[int], bool]) -> bytes:
        """Consume the longest run of bytes accepted by ``predicate`` (possibly empty)."""

        data = self._data
        end = self._position
        while end < len(data) and predicate(data[end]):
            end += 1
        chunk = data[self._position : end]
        self._position = end
        return chunk
