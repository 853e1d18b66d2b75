"""Words and phrases (RFC 5322 sections 3.2.5 and 4.1).

What:
  Parse ``word`` (an atom or a quoted string) and ``phrase`` including the
  obsolete form that allows bare dots between words, as used by display
  names.

Why:
  Display names such as ``John Q. Public`` or ``"Smith, John" Jr.`` need their
  word boundaries preserved while comments, folding and quoting disappear.

How:
  ``word`` tries ``atom`` first and falls back to ``quoted-string`` on a
  grammar mismatch only. ``phrase`` reads the first word core, then
  repeatedly measures an optional CFWS gap and accepts a further word core or
  a bare ``.`` after it. A gap between two elements is written as one space;
  the CFWS at either edge of the phrase is dropped.

  ::

      word       = atom / quoted-string
      phrase     = 1*word / obs-phrase
      obs-phrase = word *(word / "." / CFWS)

Interfaces:
  :func:`skip_word`, :func:`parse_word`, :func:`skip_phrase`,
  :func:`parse_phrase`, :data:`parse_display_name`.

Invariants & Safety:
  - A :class:`SinkError` raised anywhere aborts the phrase; only grammar
    failures end the repetition.
  - Every loop iteration consumes at least one byte or stops.
"""
from __future__ import annotations

from typing import Optional

from .atom import parse_atext, parse_atom
from .charsets import DOT, SPACE
from .cursor import Cursor
from .errors import GrammarError
from .quoted import parse_bare_quoted_string, parse_quoted_string
from .sink import Sink, emit, first_of, staging
from .whitespace import skip_optional_cfws

_WORD = (parse_atom, parse_quoted_string)
_WORD_CORE = (parse_atext, parse_bare_quoted_string)


def parse_word(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``atom / quoted-string`` and write the word's content."""

    return first_of(cursor, sink, _WORD)


def skip_word(cursor: Cursor) -> int:
    return parse_word(cursor, None)


def parse_phrase(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse a phrase and write its canonical form.

    ``(hi) John  Q.\\r\\n "Public"`` becomes ``John Q. Public``: words keep
    their content, dots are copied, and each whitespace/comment gap between
    two elements is a single space.

    Args:
      cursor: Position to start at; it is not moved.
      sink: Receives the canonical phrase, or ``None`` to measure.

    Returns:
      Number of bytes consumed, trailing CFWS included.

    Raises:
      EofError: Input ends before the first word.
      TokenError: The first word cannot be parsed.
    """

    cur = cursor.clone()
    with staging(sink) as out:
        cur.advance_by(skip_optional_cfws(cur))
        cur.advance_by(first_of(cur, out, _WORD_CORE))
        while not cur.at_end():
            ahead = cur.clone()
            gap = skip_optional_cfws(ahead)
            ahead.advance_by(gap)
            separator = SPACE if gap else b""
            try:
                with staging(out) as piece:
                    emit(piece, separator)
                    ahead.advance_by(first_of(ahead, piece, _WORD_CORE))
            except GrammarError:
                if ahead.peek() != DOT:
                    break
                emit(out, separator + b".")
                ahead.advance_by(1)
            cur = ahead
        cur.advance_by(skip_optional_cfws(cur))
    return cur.position - cursor.position


def skip_phrase(cursor: Cursor) -> int:
    return parse_phrase(cursor, None)


parse_display_name = parse_phrase
