"""imfparse configuration package.

What:
  Provide the import surface for configuration loading and the pydantic
  schema used by the field-value facade and the CLI.

Why:
  Callers should not depend on the module layout, and must go through the
  validated models instead of reading YAML themselves.

How:
  Re-export the loader helpers and schema classes and pin them in
  ``__all__``.

Interfaces:
  - get_runtime_config / load_runtime_config / reset_runtime_config /
    load_config_text: Resolve and cache ``imfparse.yaml``.
  - RuntimeConfig / GrammarSettings / LoggingSettings: Validated models.
  - ConfigLoadError / RuntimeConfigError: Failure types.
"""

from .loader import (
    ConfigLoadError,
    RuntimeConfigError,
    get_runtime_config,
    load_config_text,
    load_runtime_config,
    reset_runtime_config,
)
from .schema import GrammarSettings, LoggingSettings, RuntimeConfig

__all__ = [
    "ConfigLoadError",
    "RuntimeConfigError",
    "get_runtime_config",
    "load_config_text",
    "load_runtime_config",
    "reset_runtime_config",
    "GrammarSettings",
    "LoggingSettings",
    "RuntimeConfig",
]
