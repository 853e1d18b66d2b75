"""imfparse logging helpers with deterministic JSON emission and redaction.

What:
  Offer a tiny facade over Python streams so the field-value facade and the
  CLI emit JSON log lines with consistent fields, a minimum severity, and
  automatic removal of parsed address content.

Why:
  Addresses and display names are personal data. Operators still need to
  grep for which production failed and where, so the diagnostic context
  (token, byte, position) is kept while the values themselves are masked.

How:
  :class:`JsonLogger` is a dataclass holding the target stream, a component
  tag, a threshold and a redaction switch. ``extra`` keyword arguments are
  scrubbed recursively before being serialised with ``json.dump``.

Interfaces:
  :class:`JsonLogger`, :func:`get_logger`.

Invariants & Safety:
  - Every record carries ``ts``, ``lvl``, ``msg`` and ``component``.
  - With redaction enabled, ``value``, ``local_part``, ``domain`` and
    ``display_name`` are replaced with ``[redacted]``, also in nested
    dictionaries.
  - Streams are flushed after every record.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"value", "local_part", "domain", "display_name"})
_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


@dataclass
class JsonLogger:
    """Structured JSON logger with a severity threshold and redaction.

    What:
      Emits single-line JSON records for events at or above ``level``.

    Why:
      A uniform schema lets tests and log pipelines parse records without
      ad-hoc heuristics, and one place owns the redaction rules.

    How:
      :meth:`log` filters by severity, builds the canonical payload, merges a
      redacted copy of ``extra`` and writes it; :meth:`debug`, :meth:`info`,
      :meth:`warning` and :meth:`error` are thin wrappers.
    """

    stream: Any = field(default_factory=lambda: sys.stderr)
    component: str = "imfparse"
    level: str = "WARN"
    redact: bool = True

    def enabled_for(self, level: str) -> bool:
        return _LEVELS.get(level.upper(), 0) >= _LEVELS.get(self.level.upper(), 0)

    def log(self, level: str, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        """Emit a structured JSON log entry.

        Args:
          level: Severity name (``"debug"``, ``"info"``, ``"warn"``, ``"error"``).
          message: Core log message.
          extra: Optional context dictionary, redacted recursively.
        """

        if not self.enabled_for(level):
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "lvl": level.upper(),
            "msg": message,
            "component": self.component,
        }
        if extra:
            payload.update(self._redact(extra) if self.redact else extra)
        json.dump(payload, self.stream, separators=(",", ":"), default=str)
        self.stream.write("\n")
        self.stream.flush()

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log("DEBUG", message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log("INFO", message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log("WARN", message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log("ERROR", message, extra=kwargs)

    @staticmethod
    def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``data`` with :data:`SENSITIVE_KEYS` masked at any depth."""

        result: Dict[str, Any] = {}
        for key, value in data.items():
            if key in SENSITIVE_KEYS:
                result[key] = REDACTED
            elif isinstance(value, dict):
                result[key] = JsonLogger._redact(value)
            else:
                result[key] = value
        return result


def get_logger(
    component: str,
    *,
    level: str = "WARN",
    redact: bool = True,
    stream: Any = None,
) -> JsonLogger:
    """Construct a :class:`JsonLogger` for ``component``.

    Args:
      component: Logical subsystem name included in every record.
      level: Minimum severity to emit.
      redact: Whether parsed values are masked.
      stream: Destination; ``sys.stderr`` when omitted.

    Returns:
      Configured :class:`JsonLogger` instance.
    """

    if stream is None:
        return JsonLogger(component=component, level=level, redact=redact)
    return JsonLogger(stream=stream, component=component, level=level, redact=redact)
