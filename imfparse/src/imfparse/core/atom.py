"""Atoms and dot-atoms (RFC 5322 section 3.2.3).

What:
  Parse ``atom`` and ``dot-atom`` tokens, with and without their optional
  CFWS wrapping, writing only the ``atext`` core to the sink.

Why:
  Atoms are the unquoted building block of words, local-parts and domains.
  The surrounding CFWS is a separator and never part of the value.

How:
  A single scan measures the ``atext`` run; in dotted mode a ``.`` is taken
  only when the byte right after it is ``atext`` again, so a trailing or
  doubled dot is left for the caller (``a.`` stops before the dot).

  ::

      atom          = [CFWS] 1*atext [CFWS]
      dot-atom-text = 1*atext *("." 1*atext)
      dot-atom      = [CFWS] dot-atom-text [CFWS]

Interfaces:
  :func:`parse_atext`, :func:`skip_atom`, :func:`parse_atom`,
  :func:`skip_dot_atom`, :func:`parse_dot_atom`.
"""
from __future__ import annotations

from typing import Optional

from .charsets import ATEXT, DOT
from .cursor import Cursor
from .errors import EofError, Token, TokenError
from .sink import Sink, emit
from .whitespace import skip_optional_cfws


def _atext_span(cursor: Cursor, dotted: bool) -> int:
    data = cursor.data
    start = cursor.position
    end = len(data)
    i = start
    while i < end:
        c = data[i]
        if c in ATEXT:
            i += 1
        elif dotted and c == DOT and i > start and i + 1 < end and data[i + 1] in ATEXT:
            i += 2
        else:
            break
    return i - start


def _parse_core(cursor: Cursor, sink: Optional[Sink], dotted: bool, token: Token) -> int:
    length = _atext_span(cursor, dotted)
    if length == 0:
        c = cursor.peek()
        if c is None:
            raise EofError(cursor.position)
        raise TokenError(token, c, cursor.position)
    start = cursor.position
    emit(sink, cursor.data[start : start + length])
    return length


def _parse_wrapped(cursor: Cursor, sink: Optional[Sink], dotted: bool, token: Token) -> int:
    cur = cursor.clone()
    cur.advance_by(skip_optional_cfws(cur))
    cur.advance_by(_parse_core(cur, sink, dotted, token))
    cur.advance_by(skip_optional_cfws(cur))
    return cur.position - cursor.position


def parse_atext(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``1*atext`` with no CFWS around it."""

    return _parse_core(cursor, sink, False, Token.ATEXT)


def parse_atom(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``[CFWS] 1*atext [CFWS]`` and write the atext run.

    Raises:
      EofError: Input ends before any atext.
      TokenError: ``atext`` expected at the reported byte.
    """

    return _parse_wrapped(cursor, sink, False, Token.ATEXT)


def skip_atom(cursor: Cursor) -> int:
    return parse_atom(cursor, None)


def parse_dot_atom(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``[CFWS] dot-atom-text [CFWS]`` and write the dot-atom-text.

    Raises:
      EofError: Input ends before any atext.
      TokenError: ``dot-atom`` expected at the reported byte.
    """

    return _parse_wrapped(cursor, sink, True, Token.DOT_ATOM)


def skip_dot_atom(cursor: Cursor) -> int:
    return parse_dot_atom(cursor, None)
