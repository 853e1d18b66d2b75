"""Error taxonomy shared by every grammar layer.

What:
  Define the grammar production identifiers (:class:`Token`), the closed set of
  failure kinds (:class:`ErrorKind`), and the exception hierarchy raised by the
  parsers: :class:`EofError`, :class:`TokenError`, and :class:`SinkError`.

Why:
  Callers must tell a recoverable grammar mismatch (try the next production)
  apart from a sink failure (abort everything). Carrying the offending byte,
  its absolute position, and the production name keeps diagnostics precise
  without re-scanning the input.

How:
  All errors derive from :class:`ParseError`, which exposes ``kind`` plus the
  ``is_eof``/``is_token``/``is_io`` predicates. :data:`GrammarError` groups
  the two recoverable kinds so alternative selection reads as a single
  ``except GrammarError`` clause. The causal chain rides on ``__cause__`` and
  is surfaced through :attr:`ParseError.cause`.

Interfaces:
  :class:`Token`, :class:`ErrorKind`, :class:`ParseError`, :class:`EofError`,
  :class:`TokenError`, :class:`SinkError`, :data:`GrammarError`,
  :func:`furthest`.

Invariants & Safety:
  - ``SinkError`` is never part of :data:`GrammarError`; catching grammar
    errors can therefore never swallow an output failure.
  - Positions are absolute offsets into the cursor's data, not relative to the
    slice a layer happened to be looking at.
"""
from __future__ import annotations

import enum
from typing import Iterable, Optional


class Token(enum.Enum):
    """Grammar productions named in diagnostics (RFC 5322 spelling)."""

    FWS = "FWS"
    CFWS = "CFWS"
    COMMENT = "comment"
    QUOTED_STRING = "quoted-string"
    QUOTED_TEXT = "qtext"
    ADDRESS = "addr-spec"
    DOMAIN = "domain"
    ATOM = "atom"
    DOT_ATOM = "dot-atom"
    ATEXT = "atext"
    WORD = "word"

    def __str__(self) -> str:
        return self.value


class ErrorKind(enum.Enum):
    """Closed set of failure categories."""

    EOF = "eof"
    TOKEN = "token"
    IO = "io"


class ParseError(Exception):
    """Base class for every failure raised by the grammar layers.

    What:
      Carries the :class:`ErrorKind` and an optional causal error describing
      which lower-level failure made a production be abandoned.

    Why:
      A single base type lets the facade and CLI report any failure uniformly
      while the subclasses keep the byte-level context.

    How:
      Subclasses set :attr:`kind` as a class attribute. :meth:`set_cause`
      stores the causal error on ``__cause__`` so tracebacks show the chain.
    """

    kind: ErrorKind = ErrorKind.TOKEN
    description = "failed to parse a byte sequence"

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def set_cause(self, error: BaseException) -> "ParseError":
        self.__cause__ = error
        return self

    @property
    def is_eof(self) -> bool:
        return self.kind is ErrorKind.EOF

    @property
    def is_token(self) -> bool:
        return self.kind is ErrorKind.TOKEN

    @property
    def is_io(self) -> bool:
        return self.kind is ErrorKind.IO

    def reach(self) -> int:
        """Return how far into the input this failure got, for ranking."""

        return -1


class EofError(ParseError):
    """Input ran out while a construct was still syntactically required."""

    kind = ErrorKind.EOF
    description = "no more byte to read in the buffer"

    def __init__(self, position: Optional[int] = None) -> None:
        self.position = position
        if position is None:
            super().__init__(self.description)
        else:
            super().__init__(f"{self.description} (at position {position})")

    def reach(self) -> int:
        # Running out of input is as far as any failure can get.
        return self.position if self.position is not None else 1 << 62


class TokenError(ParseError):
    """A byte violated ``token`` at the absolute offset ``position``."""

    kind = ErrorKind.TOKEN

    def __init__(self, token: Token, byte: int, position: int) -> None:
        self.token = token
        self.byte = byte
        self.position = position
        super().__init__(
            f"failed to parse {token}: unexpected byte {_show(byte)} at position {position}"
        )

    def reach(self) -> int:
        return self.position


class SinkError(ParseError):
    """The output sink refused a write. Never recoverable."""

    kind = ErrorKind.IO
    description = "IO error"

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"{self.description}: {error}")
        self.__cause__ = error


GrammarError = (EofError, TokenError)
"""Recoverable failures that make the caller try the next production."""


def furthest(errors: Iterable[ParseError]) -> ParseError:
    """Pick the failure that reached furthest and chain the others to it.

    Ties keep the earliest alternative, i.e. the higher-priority production.
    """

    ranked = list(errors)
    best = ranked[0]
    for error in ranked[1:]:
        if error.reach() > best.reach():
            best = error
    for error in reversed(ranked):
        if error is not best and best.cause is None:
            best.set_cause(error)
            break
    return best


def _show(byte: int) -> str:
    if 33 <= byte <= 126:
        return f"{chr(byte)!r} (0x{byte:02x})"
    return f"0x{byte:02x}"
