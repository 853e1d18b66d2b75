"""Folding white space, comments and CFWS (RFC 5322 section 3.2.2).

What:
  Recognise ``FWS``, nested ``comment`` and ``CFWS`` runs. Each production has
  a measuring form (``skip_*``) and canonicalising forms that write to a sink:
  ``unfold_*`` keeps the whitespace but drops folding CRLFs, ``replace_*``
  collapses the whole run to one space.

Why:
  Nearly every structured token may be wrapped in CFWS, so this layer is hit
  more than any other. It is also where untrusted input controls recursion
  depth (nested comments), which must not translate into Python recursion.

How:
  ``FWS`` is a single forward scan in which ``CR`` only counts when followed by
  ``LF`` and a ``WSP``. Comments are scanned with an explicit nesting counter.
  ``CFWS`` alternates optional FWS and comments until neither applies.

  ::

      FWS      = ([*WSP CRLF] 1*WSP) / obs-FWS
      obs-FWS  = 1*WSP *(CRLF 1*WSP)
      comment  = "(" *([FWS] ccontent) [FWS] ")"
      ccontent = ctext / quoted-pair / comment
      CFWS     = (1*([FWS] comment) [FWS]) / FWS

Interfaces:
  :func:`skip_fws`, :func:`unfold_fws`, :func:`replace_fws`,
  :func:`skip_comment`, :func:`skip_cfws`, :func:`unfold_cfws`,
  :func:`replace_cfws`, :func:`skip_optional_cfws`.

Invariants & Safety:
  - Stack usage is constant whatever the comment nesting depth.
  - Comments never reach a sink; they carry no semantic content.
  - An empty buffer is :class:`EofError`; no match at the first byte is a
    :class:`TokenError`; a comment opened at the start of a CFWS run that
    never closes is :class:`EofError`.
"""
from __future__ import annotations

from typing import List, Optional

from .charsets import BACKSLASH, CR, LF, LPAREN, RPAREN, SPACE, WSP
from .cursor import Cursor
from .errors import EofError, GrammarError, Token, TokenError
from .sink import Sink, emit, staging


def unfold_fws(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Recognise FWS and write it to ``sink`` with the folding CRLFs removed.

    Args:
      cursor: Position to start at; it is not moved.
      sink: Destination for the unfolded whitespace, or ``None`` to measure.

    Returns:
      Number of bytes consumed.

    Raises:
      EofError: Nothing left to read.
      TokenError: The first byte does not start a FWS.
    """

    data = cursor.data
    start = cursor.position
    end = len(data)
    if start >= end:
        raise EofError(start)

    pieces: List[bytes] = []
    next_write = start
    i = start
    while i < end:
        c = data[i]
        if c in WSP:
            i += 1
        elif c == CR and i + 2 < end and data[i + 1] == LF and data[i + 2] in WSP:
            pieces.append(data[next_write:i])
            next_write = i + 2
            i += 3
        else:
            break
    if i == start:
        raise TokenError(Token.FWS, data[start], start)
    if sink is not None:
        pieces.append(data[next_write:i])
        emit(sink, b"".join(pieces))
    return i - start


def skip_fws(cursor: Cursor) -> int:
    return unfold_fws(cursor, None)


def replace_fws(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Recognise FWS and write a single space in its place."""

    consumed = unfold_fws(cursor, None)
    emit(sink, SPACE)
    return consumed


def skip_comment(cursor: Cursor) -> int:
    """Measure a (possibly nested) comment.

    A backslash always escapes the byte after it, parentheses included, so
    ``(a\\)b)`` is closed by the last parenthesis only.
    """

    data = cursor.data
    start = cursor.position
    end = len(data)
    if start >= end:
        raise EofError(start)
    if data[start] != LPAREN:
        raise TokenError(Token.COMMENT, data[start], start)

    depth = 1
    i = start + 1
    while i < end:
        c = data[i]
        if c == BACKSLASH:
            i += 2
            continue
        if c == RPAREN:
            depth -= 1
            if depth == 0:
                return i + 1 - start
        elif c == LPAREN:
            depth += 1
        i += 1
    raise EofError(end)


def unfold_cfws(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Recognise CFWS, writing its whitespace without CRLFs and without comments.

    A comment that never closes ends the run when something was already
    matched before it (``" (c) (x"`` consumes ``" (c) "``).

    Raises:
      EofError: Empty buffer, or a comment that is never closed at the very
        start of the run.
      TokenError: Neither FWS nor a comment starts at the cursor.
    """

    start = cursor.position
    if cursor.at_end():
        raise EofError(start)

    cur = cursor.clone()
    with staging(sink) as out:
        while not cur.at_end():
            try:
                cur.advance_by(unfold_fws(cur, out))
            except GrammarError:
                pass
            if cur.peek() != LPAREN:
                break
            try:
                cur.advance_by(skip_comment(cur))
            except EofError:
                if cur.position == start:
                    raise
                break
        if cur.position == start:
            raise TokenError(Token.CFWS, cursor.data[start], start)
    return cur.position - start


def skip_cfws(cursor: Cursor) -> int:
    return unfold_cfws(cursor, None)


def replace_cfws(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Recognise CFWS and write exactly one space for the whole run.

    Feeding the produced space back in yields the same single space, so the
    replacement is idempotent.
    """

    consumed = unfold_cfws(cursor, None)
    emit(sink, SPACE)
    return consumed


def skip_optional_cfws(cursor: Cursor) -> int:
    """Measure ``[CFWS]``: any grammar failure means the run is absent."""

    try:
        return unfold_cfws(cursor, None)
    except GrammarError:
        return 0
