"""Strict loader for the imfparse runtime configuration.

What:
  Locate, parse, validate and cache ``imfparse.yaml``, the document that sets
  the grammar policy (obsolete forms, input limit) and the logging
  thresholds used by :mod:`imfparse.parser` and :mod:`imfparse.cli`.

Why:
  The grammar core itself is configuration-free, but the tools built on it
  are run from cron jobs, mail filters and shells with different defaults.
  Centralising discovery and validation keeps every entry point on the same
  precedence rules and the same error messages.

How:
  Resolve candidate paths from an explicit argument, the
  ``IMFPARSE_CONFIG_PATH`` environment variable, and well-known defaults.
  Parse YAML with ``yaml.safe_load``, validate with
  :class:`~imfparse.config.schema.RuntimeConfig`, and memoise the result
  until :func:`reset_runtime_config` is called.

Interfaces:
  :func:`load_runtime_config`, :func:`get_runtime_config`,
  :func:`reset_runtime_config`, :func:`load_config_text`,
  :class:`ConfigLoadError`, :class:`RuntimeConfigError`.

Invariants:
  - Every payload passes strict pydantic validation before it is returned.
  - A path the operator named (argument or environment) must exist; only the
    built-in default locations may be silently absent, in which case the
    schema defaults apply.

Safety/Performance:
  - ``safe_load`` never constructs arbitrary Python objects.
  - OS errors are converted into typed exceptions carrying the path.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import yaml
from pydantic import ValidationError as _PydanticValidationError

from .schema import RuntimeConfig


class ConfigLoadError(Exception):
    """Base error for configuration parsing or validation failures."""


class RuntimeConfigError(ConfigLoadError):
    """Error raised when ``imfparse.yaml`` cannot be located, read or validated."""


_CONFIG_ENV = "IMFPARSE_CONFIG_PATH"
_DEFAULT_LOCATIONS: Tuple[Path, ...] = (
    Path("imfparse.yaml"),
    Path("~/.config/imfparse/config.yaml"),
    Path("/etc/imfparse/config.yaml"),
)
_RUNTIME_CACHE: Optional[Tuple[Optional[Path], RuntimeConfig]] = None


def _candidate_paths(path: Optional[Path]) -> Iterable[Tuple[Path, bool]]:
    """Yield ``(path, required)`` pairs in priority order.

    What:
      Produce the ordered list of locations to inspect, flagging the ones the
      operator asked for explicitly.

    Why:
      A typo in ``--config`` or ``IMFPARSE_CONFIG_PATH`` must not silently
      fall back to defaults, while a missing ``/etc`` file is normal.

    How:
      Deduplicate expanded paths while preserving precedence: the argument,
      then the environment variable, then the defaults.

    Args:
      path: Explicit path requested by the caller, or ``None``.

    Yields:
      Candidate path and whether its absence is an error.
    """

    seen: set[Path] = set()
    explicit = []
    if path is not None:
        explicit.append(path)
    env_path = os.environ.get(_CONFIG_ENV)
    if env_path:
        explicit.append(Path(env_path))
    for candidate in explicit:
        candidate = candidate.expanduser()
        if candidate not in seen:
            seen.add(candidate)
            yield candidate, True
    for default in _DEFAULT_LOCATIONS:
        candidate = default.expanduser()
        if candidate not in seen:
            seen.add(candidate)
            yield candidate, False


def load_config_text(text: str, source: str = "<string>") -> RuntimeConfig:
    """Parse and validate configuration YAML held in memory.

    Args:
      text: YAML document.
      source: Label used in error messages.

    Returns:
      The validated :class:`RuntimeConfig`.

    Raises:
      RuntimeConfigError: Invalid YAML, a non-mapping document, or a schema
        violation.
    """

    try:
        payload: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeConfigError(f"Invalid YAML in {source}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise RuntimeConfigError(f"{source} must contain a mapping at the top-level")
    try:
        return RuntimeConfig.model_validate(payload)
    except _PydanticValidationError as exc:
        raise RuntimeConfigError(f"Invalid configuration in {source}: {exc}") from exc


def _load_runtime_from_path(path: Path) -> RuntimeConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeConfigError(f"Configuration file missing: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem surface
        raise RuntimeConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    return load_config_text(text, str(path))


def load_runtime_config(
    path: Optional[Path | str] = None,
    *,
    reload: bool = False,
) -> RuntimeConfig:
    """Resolve, parse, and cache the runtime configuration.

    What:
      Locate ``imfparse.yaml`` using the precedence chain, parse it, and
      return a validated :class:`RuntimeConfig`.

    Why:
      The facade and the CLI both need the settings; caching avoids repeated
      disk reads while ``reload`` allows deterministic refreshes in tests.

    How:
      Consult the cache unless ``reload`` is set or a different explicit path
      is requested, walk the candidates, and remember what was loaded. When
      no candidate exists and none was required, cache the schema defaults.

    Args:
      path: Optional explicit location of the configuration file.
      reload: Bypass the cache.

    Returns:
      The validated runtime configuration.

    Raises:
      RuntimeConfigError: A required file is missing, or a file fails to
        parse or validate.
    """

    global _RUNTIME_CACHE

    requested_path = Path(path).expanduser() if isinstance(path, (str, Path)) else None
    if not reload and _RUNTIME_CACHE is not None:
        cached_path, cached_config = _RUNTIME_CACHE
        if requested_path is None or cached_path == requested_path:
            return cached_config

    for candidate, required in _candidate_paths(requested_path):
        if not candidate.exists():
            if required:
                raise RuntimeConfigError(f"Configuration file missing: {candidate}")
            continue
        config = _load_runtime_from_path(candidate)
        _RUNTIME_CACHE = (candidate, config)
        return config

    config = RuntimeConfig()
    _RUNTIME_CACHE = (None, config)
    return config


def get_runtime_config() -> RuntimeConfig:
    """Return the cached runtime configuration, loading it on demand."""

    return load_runtime_config()


def reset_runtime_config() -> None:
    """Clear the runtime configuration cache."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = None
