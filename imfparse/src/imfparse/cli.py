"""imfparse command-line interface for inspecting header field values.

What:
  Provide a Typer-based entry point exposing the ``address``, ``phrase`` and
  ``check-config`` commands that operators use to see how a raw field value
  is tokenised, and whether a configuration file is valid.

Why:
  Debugging a rejected address usually happens in a shell against a value
  copied out of a message. Wiring the CLI through :class:`FieldParser` keeps
  the command output identical to what library callers get, limits and
  obsolete-form policy included.

How:
  Each command resolves the runtime configuration, builds a
  :class:`~imfparse.parser.FieldParser`, and prints one JSON object on stdout.
  Parse and configuration failures are reported on stderr and turn into exit
  code ``1``.

Interfaces:
  ``app`` (Typer application), ``address``, ``phrase``, ``check_config``.

Invariants & Safety:
  - Exit codes follow shell expectations (``0`` success, ``1`` failure).
  - stdout carries exactly one JSON document on success and nothing on
    failure, so the output can be piped into ``jq``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, NoReturn, Optional

import typer

from .config import ConfigLoadError, RuntimeConfig, load_runtime_config
from .core import ParseError
from .parser import FieldParser, InputTooLargeError


app = typer.Typer(help="RFC 5322 field value inspector")


def _emit(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, sort_keys=True))


def _fail(message: str, exc: BaseException) -> NoReturn:
    typer.echo(f"{message}: {exc}", err=True)
    raise typer.Exit(code=1) from exc


def _runtime(config_path: Optional[str]) -> RuntimeConfig:
    try:
        return load_runtime_config(config_path)
    except ConfigLoadError as exc:
        _fail("configuration error", exc)


def _text(value: bytes) -> str:
    return value.decode("utf-8", "surrogateescape")


@app.command("address")
def address(
    value: str = typer.Argument(..., help="addr-spec value, e.g. 'john.doe@example.com'"),
    *,
    strict: bool = typer.Option(False, "--strict", help="Reject obsolete local-part/domain forms"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to imfparse.yaml"),
) -> None:
    """Parse VALUE as an address and print its canonical parts.

    What:
      Prints ``{"address", "local_part", "domain"}`` with comments, folding and
      quoting removed.

    How:
      Delegates to :meth:`FieldParser.address`; ``--strict`` overrides
      ``grammar.allow_obsolete`` for this invocation only.
    """

    parser = FieldParser(_runtime(config_path))
    try:
        parsed = parser.address(value, allow_obsolete=False if strict else None)
    except (ParseError, InputTooLargeError) as exc:
        _fail("invalid address", exc)
    _emit(
        {
            "address": _text(parsed.local_part + b"@" + parsed.domain),
            "local_part": _text(parsed.local_part),
            "domain": _text(parsed.domain),
        }
    )


@app.command("phrase")
def phrase(
    value: str = typer.Argument(..., help="Display-name phrase, e.g. '\"Doe, John\" (work)'"),
    *,
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to imfparse.yaml"),
) -> None:
    """Parse VALUE as a display-name phrase and print its canonical form."""

    parser = FieldParser(_runtime(config_path))
    try:
        result = parser.phrase(value)
    except (ParseError, InputTooLargeError) as exc:
        _fail("invalid phrase", exc)
    _emit({"phrase": _text(result)})


@app.command("check-config")
def check_config(
    config_path: Optional[str] = typer.Argument(
        None,
        help="Configuration file to validate; the usual search path when omitted.",
    ),
) -> None:
    """Validate the runtime configuration and print the effective settings."""

    runtime = _runtime(config_path)
    _emit(runtime.model_dump(mode="json"))


def main() -> None:
    """Execute the Typer application entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
