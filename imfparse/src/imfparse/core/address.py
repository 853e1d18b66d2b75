"""Local-parts, domains and addr-spec values (RFC 5322 section 3.4.1).

What:
  Parse the two halves of an e-mail address, in their strict and obsolete
  forms, plus bracketed domain literals, and assemble them into an immutable
  :class:`Address`.

Why:
  The strict grammar rejects a lot of mail that is still in circulation
  (``john . doe@example.com``, ``"john".doe@host``). Trying the strict
  productions first and the obsolete ones only afterwards accepts that mail
  while producing the same canonical bytes whenever both forms apply.

How:
  Every choice point goes through :func:`~imfparse.core.sink.first_of`, so
  each alternative writes into a scratch buffer and only the winner is kept.
  :func:`parse_address` writes the local-part and the domain into separate
  buffers and walks a bounded list of (local-part, domain) strategies; the
  value is built only once a whole strategy succeeds.

  ::

      addr-spec       = local-part "@" domain
      local-part      = dot-atom / quoted-string / obs-local-part
      obs-local-part  = word *("." word)
      domain          = dot-atom / domain-literal / obs-domain
      obs-domain      = atom *("." atom)
      domain-literal  = [CFWS] "[" *([FWS] dtext) [FWS] "]" [CFWS]
      dtext           = %d33-90 / %d94-126 / obs-dtext
      obs-dtext       = obs-NO-WS-CTL / quoted-pair

Interfaces:
  :class:`Address`, :func:`parse_local_part`,
  :func:`parse_obsolete_local_part`, :func:`parse_domain`,
  :func:`parse_domain_literal`, :func:`parse_obsolete_domain`,
  :func:`parse_address`, and the matching ``skip_*`` helpers.

Invariants & Safety:
  - Domain literals keep their brackets in the output; FWS inside them is a
    single space.
  - Strategy count is fixed (at most four), so a failing address costs a
    constant number of linear scans.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .atom import parse_dot_atom
from .charsets import AT, ATEXT, BACKSLASH, DOT, DTEXT, LBRACKET, RBRACKET
from .cursor import Cursor
from .errors import EofError, GrammarError, ParseError, Token, TokenError, furthest
from .phrase import parse_word
from .quoted import parse_quoted_string
from .sink import ByteSink, Sink, emit, first_of, staging
from .whitespace import replace_fws, skip_optional_cfws

Parser = Callable[[Cursor, Optional[Sink]], int]


@dataclass(frozen=True)
class Address:
    """Canonical ``local-part@domain`` value.

    ``local_part`` holds the un-quoted, un-escaped local-part; ``domain``
    holds the dot-atom text or the bracketed literal.
    """

    local_part: bytes
    domain: bytes

    def __str__(self) -> str:
        return (self.local_part + b"@" + self.domain).decode("ascii")

    @classmethod
    def from_bytes(cls, value: bytes, *, allow_obsolete: bool = True) -> "Address":
        """Parse ``value`` as a complete addr-spec; trailing bytes are an error."""

        address, _ = parse_address(Cursor(value), allow_obsolete=allow_obsolete, require_end=True)
        return address


def _dot_chain(cursor: Cursor, sink: Optional[Sink], element: Parser) -> int:
    """Parse ``element *("." element)``; a dot without a following element stays unread."""

    cur = cursor.clone()
    with staging(sink) as out:
        cur.advance_by(element(cur, out))
        while cur.peek() == DOT:
            ahead = cur.clone()
            ahead.advance_by(1)
            try:
                with staging(out) as piece:
                    emit(piece, b".")
                    ahead.advance_by(element(ahead, piece))
            except GrammarError:
                break
            cur = ahead
    return cur.position - cursor.position


def parse_obsolete_local_part(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``word *("." word)``.

    More permissive than the strict local-part: atoms and quoted strings may
    be mixed (``john."q".public``) and CFWS may surround the dots
    (``john . public``). CFWS is dropped from the output.
    """

    return _dot_chain(cursor, sink, parse_word)


def parse_obsolete_domain(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse ``atom *("." atom)`` in its legacy reading.

    The dots bind directly to the atext runs: CFWS may precede the first atom
    and follow the last one, but never sits between an atom and a dot, so
    ``b . c`` stops after ``b ``. A dot not followed by atext is left unread.

    Raises:
      EofError: Input ends before any atext.
      TokenError: ``atom`` expected at the reported byte.
    """

    data = cursor.data
    cur = cursor.clone()
    cur.advance_by(skip_optional_cfws(cur))
    start = cur.position
    first = cur.peek()
    if first is None:
        raise EofError(start)
    if first not in ATEXT:
        raise TokenError(Token.ATOM, first, start)
    cur.read_while(ATEXT.__contains__)
    while cur.peek() == DOT and cur.peek(1) in ATEXT:
        cur.advance_by(1)
        cur.read_while(ATEXT.__contains__)
    emit(sink, data[start : cur.position])
    cur.advance_by(skip_optional_cfws(cur))
    return cur.position - cursor.position


def parse_domain_literal(cursor: Cursor, sink: Optional[Sink] = None) -> int:
    """Parse a bracketed domain literal, brackets included in the output.

    ``[192.168.\\r\\n 0.1]`` is written as ``[192.168. 0.1]``.

    Raises:
      EofError: Input ends before the closing bracket.
      TokenError: Missing ``[``, a byte outside ``dtext``, or an escape of a
        byte above 126 (all reported as ``domain``).
    """

    data = cursor.data
    cur = cursor.clone()
    cur.advance_by(skip_optional_cfws(cur))
    first = cur.peek()
    if first is None:
        raise EofError(cur.position)
    if first != LBRACKET:
        raise TokenError(Token.DOMAIN, first, cur.position)
    cur.advance_by(1)

    with staging(sink) as out:
        emit(out, b"[")
        while True:
            try:
                cur.advance_by(replace_fws(cur, out))
            except GrammarError:
                pass
            c = cur.peek()
            if c is None:
                raise EofError(cur.position)
            if c == RBRACKET:
                break
            if c in DTEXT:
                run = cur.read_while(DTEXT.__contains__)
                emit(out, run)
            elif c == BACKSLASH:
                escaped = cur.peek(1)
                if escaped is None:
                    raise EofError(len(data))
                if escaped > 126:
                    raise TokenError(Token.DOMAIN, escaped, cur.position + 1)
                emit(out, bytes((escaped,)))
                cur.advance_by(2)
            else:
                raise TokenError(Token.DOMAIN, c, cur.position)
        cur.advance_by(1)
        emit(out, b"]")
    cur.advance_by(skip_optional_cfws(cur))
    return cur.position - cursor.position


_STRICT_LOCAL_PART: Tuple[Parser, ...] = (parse_dot_atom, parse_quoted_string)
_STRICT_DOMAIN: Tuple[Parser, ...] = (parse_dot_atom, parse_domain_literal)


def _local_part_parsers(allow_obsolete: bool) -> Tuple[Parser, ...]:
    if allow_obsolete:
        return _STRICT_LOCAL_PART + (parse_obsolete_local_part,)
    return _STRICT_LOCAL_PART


def _domain_parsers(allow_obsolete: bool) -> Tuple[Parser, ...]:
    if allow_obsolete:
        return _STRICT_DOMAIN + (parse_obsolete_domain,)
    return _STRICT_DOMAIN


def parse_local_part(
    cursor: Cursor, sink: Optional[Sink] = None, *, allow_obsolete: bool = True
) -> int:
    """Parse ``dot-atom / quoted-string`` and, if allowed, ``obs-local-part``."""

    return first_of(cursor, sink, _local_part_parsers(allow_obsolete))


def skip_local_part(cursor: Cursor, *, allow_obsolete: bool = True) -> int:
    return parse_local_part(cursor, None, allow_obsolete=allow_obsolete)


def parse_domain(cursor: Cursor, sink: Optional[Sink] = None, *, allow_obsolete: bool = True) -> int:
    """Parse ``dot-atom / domain-literal`` and, if allowed, ``obs-domain``."""

    return first_of(cursor, sink, _domain_parsers(allow_obsolete))


def skip_domain(cursor: Cursor, *, allow_obsolete: bool = True) -> int:
    return parse_domain(cursor, None, allow_obsolete=allow_obsolete)


def _strict_local_part(cursor: Cursor, sink: Optional[Sink]) -> int:
    return first_of(cursor, sink, _STRICT_LOCAL_PART)


def _strict_domain(cursor: Cursor, sink: Optional[Sink]) -> int:
    return first_of(cursor, sink, _STRICT_DOMAIN)


def _strategies(allow_obsolete: bool) -> List[Tuple[Parser, Parser]]:
    if not allow_obsolete:
        return [(_strict_local_part, _strict_domain)]
    return [
        (_strict_local_part, _strict_domain),
        (_strict_local_part, parse_obsolete_domain),
        (parse_obsolete_local_part, _strict_domain),
        (parse_obsolete_local_part, parse_obsolete_domain),
    ]


def _expect_at(cursor: Cursor) -> None:
    c = cursor.peek()
    if c is None:
        raise EofError(cursor.position)
    if c != AT:
        raise TokenError(Token.ADDRESS, c, cursor.position)
    cursor.advance_by(1)


def parse_address(
    cursor: Cursor,
    *,
    allow_obsolete: bool = True,
    require_end: bool = False,
) -> Tuple[Address, int]:
    """Parse ``local-part "@" domain`` into an :class:`Address`.

    What:
      Returns the canonical address and the number of bytes consumed.

    Why:
      The strict local-part can succeed on a prefix the obsolete form would
      extend (``a . b@x`` stops the dot-atom at ``a ``), so picking a winner
      per half is not enough; the halves are chosen together.

    How:
      Walk the strategies (strict/strict, strict/obsolete, obsolete/strict,
      obsolete/obsolete). Each writes the local-part and the domain into
      fresh :class:`ByteSink` buffers, so a strategy that fails halfway leaves
      nothing behind. The successful strategy that consumed the most wins,
      earlier strategies breaking ties; one that reaches the end of input
      stops the walk. With ``require_end`` a strategy must also consume the
      whole input.

    Args:
      cursor: Position to start at; it is not moved.
      allow_obsolete: Whether the ``obs-local-part``/``obs-domain`` forms may
        be used.
      require_end: Reject strategies that leave bytes unread.

    Returns:
      ``(address, consumed)``.

    Raises:
      EofError: Input ends inside the address.
      TokenError: Missing ``@`` (``addr-spec``), trailing bytes with
        ``require_end`` (``addr-spec``), or the furthest failure inside a
        half.
    """

    failures: List[ParseError] = []
    best: Optional[Tuple[Address, int]] = None
    for local_parser, domain_parser in _strategies(allow_obsolete):
        local = ByteSink()
        domain = ByteSink()
        cur = cursor.clone()
        try:
            cur.advance_by(local_parser(cur, local))
            _expect_at(cur)
            cur.advance_by(domain_parser(cur, domain))
            if require_end and not cur.at_end():
                raise TokenError(Token.ADDRESS, cur.data[cur.position], cur.position)
        except GrammarError as exc:
            failures.append(exc)
            continue
        consumed = cur.position - cursor.position
        if best is None or consumed > best[1]:
            best = Address(local.getvalue(), domain.getvalue()), consumed
        if cur.at_end():
            break
    if best is None:
        raise furthest(failures)
    return best


def skip_address(cursor: Cursor, *, allow_obsolete: bool = True) -> int:
    _, consumed = parse_address(cursor, allow_obsolete=allow_obsolete)
    return consumed
