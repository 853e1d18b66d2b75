"""Pydantic models describing the imfparse runtime configuration."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARN", "ERROR"]


class GrammarSettings(BaseModel):
    """Which productions the field-value facade accepts and how much input."""

    model_config = ConfigDict(extra="forbid")

    allow_obsolete: bool = True
    max_input_bytes: int = Field(default=65536, gt=0)


class LoggingSettings(BaseModel):
    """Structured logging thresholds."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARN"
    redact_values: bool = True
    component: str = "imfparse"


class RuntimeConfig(BaseModel):
    """Top-level ``imfparse.yaml`` document."""

    model_config = ConfigDict(extra="forbid")

    version: Literal[1] = 1
    grammar: GrammarSettings = Field(default_factory=GrammarSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
