"""Byte classifiers for the RFC 5322 lexical grammar.

What:
  Total predicates over a single byte value (``int`` in ``range(256)``) for
  the character classes the grammar is built from, plus the delimiter
  constants the parsers compare against.

Why:
  Every layer above asks the same questions ("is this atext?", "may this
  appear unescaped in a quoted string?"). Keeping the answers in one place
  keeps the grammar modules readable and the classes consistent.

How:
  Each class is an immutable :class:`frozenset` built once at import time;
  predicates are membership tests. Obsolete control characters
  (``obs-NO-WS-CTL``) are folded into ``qtext``, ``ctext`` and ``dtext``
  because the parsers accept the legacy forms.

Interfaces:
  ``is_alpha``, ``is_digit``, ``is_atext``, ``is_wsp``, ``is_obs_no_ws_ctl``,
  ``is_qtext``, ``is_ctext``, ``is_dtext``, ``is_special``, ``is_vchar`` and
  the byte constants.

Invariants & Safety:
  - No predicate raises; bytes above 127 are simply outside every class.
"""
from __future__ import annotations

from typing import FrozenSet

NUL = 0x00
HTAB = 0x09
LF = 0x0A
CR = 0x0D
SP = 0x20
DQUOTE = 0x22
LPAREN = 0x28
RPAREN = 0x29
DOT = 0x2E
AT = 0x40
LBRACKET = 0x5B
BACKSLASH = 0x5C
RBRACKET = 0x5D
DEL = 0x7F

CRLF = b"\r\n"
SPACE = b" "

ALPHA: FrozenSet[int] = frozenset(range(ord("A"), ord("Z") + 1)) | frozenset(
    range(ord("a"), ord("z") + 1)
)
DIGIT: FrozenSet[int] = frozenset(range(ord("0"), ord("9") + 1))
ATEXT: FrozenSet[int] = ALPHA | DIGIT | frozenset(b"!#$%&'*+-/=?^_`{|}~")
WSP: FrozenSet[int] = frozenset((SP, HTAB))

# obs-NO-WS-CTL = %d1-8 / %d11 / %d12 / %d14-31 / %d127
OBS_NO_WS_CTL: FrozenSet[int] = (
    frozenset(range(1, 9)) | frozenset((11, 12)) | frozenset(range(14, 32)) | frozenset((DEL,))
)
# qtext = %d33 / %d35-91 / %d93-126 / obs-qtext
QTEXT: FrozenSet[int] = (
    frozenset((33,)) | frozenset(range(35, 92)) | frozenset(range(93, 127)) | OBS_NO_WS_CTL
)
# ctext = %d33-39 / %d42-91 / %d93-126 / obs-ctext
CTEXT: FrozenSet[int] = (
    frozenset(range(33, 40)) | frozenset(range(42, 92)) | frozenset(range(93, 127)) | OBS_NO_WS_CTL
)
# dtext = %d33-90 / %d94-126 / obs-dtext (the quoted-pair half is handled by the parser)
DTEXT: FrozenSet[int] = frozenset(range(33, 91)) | frozenset(range(94, 127)) | OBS_NO_WS_CTL
SPECIALS: FrozenSet[int] = frozenset(b'()<>[]:;@\\,."')
VCHAR: FrozenSet[int] = frozenset(range(33, 127))


def is_alpha(c: int) -> bool:
    return c in ALPHA


def is_digit(c: int) -> bool:
    return c in DIGIT


def is_atext(c: int) -> bool:
    """``ALPHA / DIGIT`` or one of ``! # $ % & ' * + - / = ? ^ _ ` { | } ~``."""

    return c in ATEXT


def is_wsp(c: int) -> bool:
    return c in WSP


def is_obs_no_ws_ctl(c: int) -> bool:
    """US-ASCII controls other than NUL, CR, LF and horizontal tab."""

    return c in OBS_NO_WS_CTL


def is_qtext(c: int) -> bool:
    """Bytes allowed unescaped between double quotes."""

    return c in QTEXT


def is_ctext(c: int) -> bool:
    """Bytes allowed unescaped inside a comment."""

    return c in CTEXT


def is_dtext(c: int) -> bool:
    """Bytes allowed unescaped inside a domain literal."""

    return c in DTEXT


def is_special(c: int) -> bool:
    return c in SPECIALS


def is_vchar(c: int) -> bool:
    return c in VCHAR
