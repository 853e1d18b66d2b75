"""
Module: imfparse.__init__

What:
  Aggregate package exports for the RFC 5322 field-value tokenizer and expose
  the namespace segments (grammar core, configuration, utilities) plus the
  field-value facade.

Why:
  Header parsers and CLI commands import these names to compose productions
  without depending on private modules, so the internal layout can evolve
  freely.

How:
  Re-export :class:`~imfparse.parser.FieldParser` and the error it adds, and
  enumerate the public subpackages in ``__all__``.

Interfaces:
  - core: Cursor, classifiers, FWS/CFWS, quoted strings, atoms, phrases,
    addresses and the error model.
  - config: Runtime configuration schema and loader.
  - utils: Structured JSON logging.
  - FieldParser / InputTooLargeError: Whole-value parsing under policy.

Invariants:
  - Importing the package has no side effects; configuration is only read
    when a :class:`FieldParser` is built without one.
"""

from .parser import FieldParser, InputTooLargeError

__version__ = "0.1.0"

__all__ = [
    "FieldParser",
    "InputTooLargeError",
    "config",
    "core",
    "utils",
]
