"""Quoted pairs, quoted content and quoted strings (RFC 5322 3.2.1, 3.2.4).

What:
  Parse ``quoted-pair``, runs of ``qcontent`` and complete
  ``quoted-string`` tokens, removing escaping backslashes and folding the
  whitespace inside the quotes as the grammar prescribes.

Why:
  Quoted strings are the only way a local-part or display name can carry
  spaces and specials. Semantically the surrounding CFWS, the quote characters
  and every escaping backslash are invisible; callers want the content only.

How:
  ``qcontent`` is a forward scan that collects the spans between backslashes
  and skips each backslash, so a run of escapes becomes one contiguous write.
  ``quoted-string`` strips optional CFWS, then alternates ``[FWS]`` (written
  as one space) and ``qcontent`` until the closing quote.

  ::

      quoted-pair   = ("\\" (VCHAR / WSP)) / obs-qp      ; i.e. "\\" %d0-127
      qcontent      = qtext / quoted-pair
      quoted-string = [CFWS] DQUOTE *([FWS] qcontent) [FWS] DQUOTE [CFWS]

Interfaces:
  :func:`skip_quoted_pair`, :func:`parse_quoted_pair`, :func:`skip_qcontent`,
  :func:`parse_qcontent`, :func:`parse_bare_quoted_string`,
  :func:`skip_quoted_string`, :func:`parse_quoted_string`.

Invariants & Safety:
  - A backslash at the very end of input is :class:`EofError`; a backslash
    before a byte above 127 is a :class:`TokenError` naming the
    ``quoted-string`` production and the offending byte.
  - Output is staged and reaches the caller's sink only when the closing
    quote has been seen.
"""
from __future__ import annotations

from typing import List, Optional

from .charsets import BACKSLASH, DQUOTE, QTEXT
from .cursor import Cursor
from .errors import EofError, GrammarError, Token, TokenError
from .sink import Sink, emit, staging
from .whitespace import replace_fws, skip_optional_cfws


def parse_quoted_pair(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``"\\" %d0-127`` and write the escaped byte alone."""

    data = cursor.data
    start = cursor.position
    if start >= len(data):
        raise EofError(start)
    if data[start] != BACKSLASH:
        raise TokenError(Token.QUOTED_STRING, data[start], start)
    if start + 1 >= len(data):
        raise EofError(len(data))
    escaped = data[start + 1]
    if escaped > 127:
        raise TokenError(Token.QUOTED_STRING, escaped, start + 1)
    emit(sink, data[start + 1 : start + 2])
    return 2


def skip_quoted_pair(cursor: Cursor) -> int:
    return parse_quoted_pair(cursor, None)


def parse_qcontent(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse a run of quoted content, un-escaping quoted pairs into ``sink``.

    The run stops at the first byte that is neither ``qtext`` nor the start
    of a quoted pair: whitespace, the closing quote, or anything invalid.

    Args:
      cursor: Position to start at; it is not moved.
      sink: Receives the content with escaping backslashes removed.

    Returns:
      Number of bytes consumed (escape characters included).

    Raises:
      EofError: Empty input, or a trailing lone backslash.
      TokenError: No content at the cursor (``qtext``), or a backslash
        followed by a non-ASCII byte (``quoted-string``).
    """

    data = cursor.data
    start = cursor.position
    end = len(data)
    if start >= end:
        raise EofError(start)

    pieces: List[bytes] = []
    last_write = start
    i = start
    while i < end:
        c = data[i]
        if c in QTEXT:
            i += 1
        elif c == BACKSLASH:
            if i + 1 >= end:
                raise EofError(end)
            if data[i + 1] > 127:
                raise TokenError(Token.QUOTED_STRING, data[i + 1], i + 1)
            pieces.append(data[last_write:i])
            # keep the escaped byte, drop the backslash
            last_write = i + 1
            i += 2
        else:
            break
    if i == start:
        raise TokenError(Token.QUOTED_TEXT, data[start], start)
    if sink is not None:
        pieces.append(data[last_write:i])
        emit(sink, b"".join(pieces))
    return i - start


def skip_qcontent(cursor: Cursor) -> int:
    return parse_qcontent(cursor, None)


def parse_bare_quoted_string(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``DQUOTE *([FWS] qcontent) [FWS] DQUOTE`` with no CFWS around it."""

    cur = cursor.clone()
    first = cur.peek()
    if first is None:
        raise EofError(cur.position)
    if first != DQUOTE:
        raise TokenError(Token.QUOTED_STRING, first, cur.position)
    cur.advance_by(1)

    with staging(sink) as out:
        while True:
            try:
                cur.advance_by(replace_fws(cur, out))
            except GrammarError:
                pass
            c = cur.peek()
            if c is None:
                raise EofError(cur.position)
            if c == DQUOTE:
                break
            if c in QTEXT or c == BACKSLASH:
                cur.advance_by(parse_qcontent(cur, out))
            else:
                raise TokenError(Token.QUOTED_STRING, c, cur.position)
    cur.advance_by(1)
    return cur.position - cursor.position


def parse_quoted_string(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse a full ``quoted-string`` and write its semantic content.

    Surrounding CFWS and the quotes are dropped, quoted pairs lose their
    backslash, and each FWS between the quotes becomes a single space::

        b' (c) "\\"simple\\"\\r\\n string" ' -> b'"simple" string'

    Raises:
      EofError: Input ends before the closing quote.
      TokenError: Missing opening quote, or a byte that cannot appear inside
        the quotes.
    """

    cur = cursor.clone()
    cur.advance_by(skip_optional_cfws(cur))
    cur.advance_by(parse_bare_quoted_string(cur, sink))
    cur.advance_by(skip_optional_cfws(cur))
    return cur.position - cursor.position


def skip_quoted_string(cursor: Cursor) -> int:
    return parse_quoted_string(cursor, None)
