"""Append-only output sinks and per-alternative staging.

What:
  Describe the sink contract (:class:`Sink`), ship the in-memory
  :class:`ByteSink`, and provide :func:`emit` and :func:`staging`, the two
  primitives every canonicalising parser writes through.

Why:
  Sinks cannot un-write. When a production is tried speculatively and then
  abandoned, whatever it wrote must not reach the caller. Staging each attempt
  in a scratch buffer and splicing it into the real sink only on success keeps
  failed alternatives invisible.

How:
  :func:`staging` is a context manager yielding a fresh :class:`ByteSink`
  (or ``None`` when the caller measures only). Leaving the block normally
  commits the scratch bytes through :func:`emit`; an exception skips the
  commit. :func:`emit` converts write failures into
  :class:`~imfparse.core.errors.SinkError`.

Interfaces:
  :class:`Sink`, :class:`ByteSink`, :func:`emit`, :func:`staging`,
  :func:`first_of`.

Invariants & Safety:
  - Scratch buffers are in memory, so the only place a ``SinkError`` can
    originate is the commit into a caller-supplied sink.
  - ``None`` as a sink means "skip mode": nothing is buffered or written.
"""
from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Protocol, Sequence

from .errors import GrammarError, ParseError, SinkError, furthest

if TYPE_CHECKING:
    from .cursor import Cursor


class Sink(Protocol):
    """Anything with a ``write(bytes)`` method: files, ``io.BytesIO``, :class:`ByteSink`."""

    def write(self, data: bytes) -> object: ...


class ByteSink:
    """Growable in-memory sink."""

    __slots__ = ("_buffer",)

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        self._buffer += data
        return len(data)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


def emit(sink: Optional[Sink], data: bytes) -> None:
    """Append ``data`` to ``sink``; a refused write becomes :class:`SinkError`."""

    if sink is None or not data:
        return
    try:
        sink.write(data)
    except (OSError, ValueError) as exc:
        raise SinkError(exc) from exc


@contextlib.contextmanager
def staging(sink: Optional[Sink]) -> Iterator[Optional[ByteSink]]:
    """Buffer writes for one alternative and commit them only on success."""

    if sink is None:
        yield None
        return
    scratch = ByteSink()
    yield scratch
    emit(sink, scratch.getvalue())


def first_of(
    cursor: "Cursor",
    sink: Optional[Sink],
    parsers: Sequence[Callable[["Cursor", Optional[Sink]], int]],
) -> int:
    """Try ``parsers`` in priority order and return the first success.

    Each attempt writes into its own staging buffer, so only the winning
    alternative reaches ``sink``. Grammar failures move on to the next parser;
    anything else propagates at once. When all fail, the failure that got
    furthest into the input is raised.
    """

    failures: List[ParseError] = []
    for parser in parsers:
        try:
            with staging(sink) as out:
                return parser(cursor, out)
        except GrammarError as exc:
            failures.append(exc)
    raise furthest(failures)
