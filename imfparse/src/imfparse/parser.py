"""Field-value facade applying runtime policy around the grammar core.

What:
  Parse one already-extracted header field value (an address, a display
  name, or a whitespace run) while enforcing the configured input limit and
  obsolete-form policy, and report the outcome through the structured logger.

Why:
  The grammar functions work on a cursor and happily stop in the middle of a
  value; tools that receive a whole value from a header need "all of it or an
  error" semantics, a bound on hostile input size, and an audit trail that
  does not leak the parsed addresses.

How:
  Each public method converts the value to bytes, checks its length, runs the
  production over a fresh :class:`~imfparse.core.Cursor`, and rejects any
  unconsumed tail with a :class:`~imfparse.core.TokenError` naming the
  production. Outcomes are logged at DEBUG and failures at WARN.

Interfaces:
  :class:`FieldParser`, :class:`InputTooLargeError`.

Invariants & Safety:
  - Parsed values only reach the logger under redacted keys.
  - :class:`~imfparse.core.SinkError` cannot occur here; output is buffered in
    memory.
"""
from __future__ import annotations

from typing import Callable, Optional, Union

from .config import RuntimeConfig, get_runtime_config
from .core import (
    Address,
    ByteSink,
    Cursor,
    ParseError,
    Token,
    TokenError,
    parse_address,
    parse_phrase,
    unfold_cfws,
)
from .utils.logging import JsonLogger, get_logger

FieldValue = Union[str, bytes, bytearray]


class InputTooLargeError(ValueError):
    """The value exceeds ``grammar.max_input_bytes``."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"field value of {size} bytes exceeds the {limit} byte limit")


def _as_bytes(value: FieldValue) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    return bytes(value)


def _as_text(value: bytes) -> str:
    return value.decode("utf-8", "backslashreplace")


class FieldParser:
    """Parse complete field values under a :class:`RuntimeConfig`.

    What:
      Wraps :func:`~imfparse.core.parse_address`,
      :func:`~imfparse.core.parse_phrase` and
      :func:`~imfparse.core.unfold_cfws` with whole-value semantics.

    Why:
      Lets CLI commands and library callers share one policy: same limit, same
      obsolete-form switch, same log records.

    How:
      The configuration defaults to :func:`get_runtime_config`; the logger is
      derived from its ``logging`` section unless one is injected.

    Attributes:
      config: Active runtime configuration.
      logger: Structured logger receiving outcome records.
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        logger: Optional[JsonLogger] = None,
    ) -> None:
        self.config = config if config is not None else get_runtime_config()
        if logger is None:
            settings = self.config.logging
            logger = get_logger(
                settings.component,
                level=settings.level,
                redact=settings.redact_values,
            )
        self.logger = logger

    def address(self, value: FieldValue, *, allow_obsolete: Optional[bool] = None) -> Address:
        """Parse ``value`` as a complete ``addr-spec``.

        Args:
          value: The field value; ``str`` is encoded as UTF-8.
          allow_obsolete: Override ``grammar.allow_obsolete`` for this call.

        Returns:
          The canonical :class:`~imfparse.core.Address`.

        Raises:
          InputTooLargeError: ``value`` is longer than the configured limit.
          ParseError: The value is not a single address.
        """

        if allow_obsolete is None:
            allow_obsolete = self.config.grammar.allow_obsolete
        data = self._checked(value)
        try:
            address, _ = parse_address(
                Cursor(data), allow_obsolete=allow_obsolete, require_end=True
            )
        except ParseError as exc:
            self._failed("address", data, exc)
            raise
        self.logger.debug(
            "address parsed",
            size=len(data),
            obsolete=allow_obsolete,
            local_part=_as_text(address.local_part),
            domain=_as_text(address.domain),
        )
        return address

    def phrase(self, value: FieldValue) -> bytes:
        """Parse ``value`` as a display-name phrase and return its canonical bytes.

        Raises:
          InputTooLargeError: ``value`` is longer than the configured limit.
          ParseError: The value is not a single phrase.
        """

        result = self._whole("phrase", value, parse_phrase, Token.WORD)
        self.logger.debug("phrase parsed", size=len(result), display_name=_as_text(result))
        return result

    def unfold(self, value: FieldValue) -> bytes:
        """Unfold a CFWS-only value: CRLFs and comments removed, whitespace kept."""

        result = self._whole("unfold", value, unfold_cfws, Token.CFWS)
        self.logger.debug("cfws unfolded", size=len(result))
        return result

    def _checked(self, value: FieldValue) -> bytes:
        data = _as_bytes(value)
        limit = self.config.grammar.max_input_bytes
        if len(data) > limit:
            self.logger.warning("field value rejected", reason="too_large", size=len(data), limit=limit)
            raise InputTooLargeError(len(data), limit)
        return data

    def _whole(
        self,
        operation: str,
        value: FieldValue,
        production: Callable[[Cursor, Optional[ByteSink]], int],
        token: Token,
    ) -> bytes:
        data = self._checked(value)
        sink = ByteSink()
        try:
            consumed = production(Cursor(data), sink)
            if consumed < len(data):
                raise TokenError(token, data[consumed], consumed)
        except ParseError as exc:
            self._failed(operation, data, exc)
            raise
        return sink.getvalue()

    def _failed(self, operation: str, data: bytes, exc: ParseError) -> None:
        self.logger.warning(
            "field value rejected",
            operation=operation,
            kind=exc.kind.value,
            token=str(getattr(exc, "token", "")) or None,
            position=getattr(exc, "position", None),
            size=len(data),
            value=_as_text(data),
        )
