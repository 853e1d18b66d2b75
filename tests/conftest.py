"""Pytest configuration shared by the unit and end-to-end suites.

What:
  Establish project import paths and reset the runtime configuration around
  every test.

Why:
  The suites import the ``imfparse`` package straight from the source tree. To
  ensure imports resolve there rather than to an installed wheel, the
  ``imfparse/src`` directory is prepended to ``sys.path``. The configuration
  loader memoises what it finds, so the cache and the environment variable it
  honours must not leak between tests.

How:
  Compute the project root relative to this file, inject the source directory
  into ``sys.path`` when present, and define :func:`runtime_config` which
  clears ``IMFPARSE_CONFIG_PATH``, points ``HOME`` and the working directory at
  a scratch directory so no stray ``imfparse.yaml`` is picked up, and resets
  the cache before and after each test.

Interfaces:
  :func:`runtime_config` (autouse pytest fixture).
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "imfparse" / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

import pytest

from imfparse.config.loader import reset_runtime_config


@pytest.fixture(autouse=True)
def runtime_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate configuration discovery for every test.

    Args:
      monkeypatch: Pytest helper used for the environment and working directory.
      tmp_path: Scratch directory used as the working directory.
    """

    monkeypatch.delenv("IMFPARSE_CONFIG_PATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    reset_runtime_config()
    try:
        yield
    finally:
        reset_runtime_config()
