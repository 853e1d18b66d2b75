"""Grammar core: cursor, classifiers, and the RFC 5322 productions.

What:
  Re-export the parsing primitives so callers can write
  ``from imfparse.core import Cursor, parse_address`` without knowing which
  module owns which production.

Why:
  Higher-level header parsers compose these operations once per field value;
  a flat, stable import surface keeps that composition independent of the
  internal layout.

How:
  Import the public callables from each layer module and list them in
  ``__all__``. Modules are small and dependency-free, so nothing is loaded
  lazily.

Interfaces:
  See ``__all__``.

Invariants & Safety:
  - Nothing exported here keeps state between calls; every operation is a
    function of its cursor (and sink).
"""

from .address import (
    Address,
    parse_address,
    parse_domain,
    parse_domain_literal,
    parse_local_part,
    parse_obsolete_domain,
    parse_obsolete_local_part,
    skip_address,
    skip_domain,
    skip_local_part,
)
from .atom import parse_atext, parse_atom, parse_dot_atom, skip_atom, skip_dot_atom
from .cursor import Cursor
from .errors import (
    EofError,
    ErrorKind,
    GrammarError,
    ParseError,
    SinkError,
    Token,
    TokenError,
)
from .phrase import parse_display_name, parse_phrase, parse_word, skip_phrase, skip_word
from .quoted import (
    parse_bare_quoted_string,
    parse_qcontent,
    parse_quoted_pair,
    parse_quoted_string,
    skip_qcontent,
    skip_quoted_pair,
    skip_quoted_string,
)
from .sink import ByteSink, Sink
from .whitespace import (
    replace_cfws,
    replace_fws,
    skip_cfws,
    skip_comment,
    skip_fws,
    skip_optional_cfws,
    unfold_cfws,
    unfold_fws,
)

__all__ = [
    "Address",
    "ByteSink",
    "Cursor",
    "EofError",
    "ErrorKind",
    "GrammarError",
    "ParseError",
    "Sink",
    "SinkError",
    "Token",
    "TokenError",
    "parse_address",
    "parse_atext",
    "parse_atom",
    "parse_bare_quoted_string",
    "parse_display_name",
    "parse_domain",
    "parse_domain_literal",
    "parse_dot_atom",
    "parse_local_part",
    "parse_obsolete_domain",
    "parse_obsolete_local_part",
    "parse_phrase",
    "parse_qcontent",
    "parse_quoted_pair",
    "parse_quoted_string",
    "parse_word",
    "replace_cfws",
    "replace_fws",
    "skip_address",
    "skip_atom",
    "skip_cfws",
    "skip_comment",
    "skip_domain",
    "skip_dot_atom",
    "skip_fws",
    "skip_local_part",
    "skip_optional_cfws",
    "skip_phrase",
    "skip_qcontent",
    "skip_quoted_pair",
    "skip_quoted_string",
    "skip_word",
    "unfold_cfws",
    "unfold_fws",
]
