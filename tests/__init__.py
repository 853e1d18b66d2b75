"""Test package for imfparse.

What:
  Marks ``tests`` as a package so the shared ``tests/conftest.py`` is imported
  as ``tests.conftest`` and never collides with ``tests/unit/conftest.py``.

Invariants & Safety:
  - Importing ``tests`` has no side effects.
"""
