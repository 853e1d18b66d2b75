"""Expose the public utility surface for imfparse.

What:
  Re-export the structured logging helpers.

Why:
  ``from imfparse.utils import get_logger`` stays stable whatever the module
  layout becomes.
"""

from .logging import JsonLogger, get_logger

__all__ = [
    "JsonLogger",
    "get_logger",
]
