"""Pytest fixtures for unit tests needing sink doubles or a log stream.

What:
  Make ``tests/unit`` importable so modules can ``from fakes import ...`` and
  expose fixtures for the sink doubles and an in-memory log stream.

How:
  Append the unit directory to ``sys.path`` and build a fresh instance per
  test so no state leaks between cases.

Interfaces:
  :func:`recording_sink`, :func:`failing_sink`, :func:`log_stream`,
  :func:`log_records`.
"""

import io
import json
import sys
from pathlib import Path

import pytest

UNIT_DIR = Path(__file__).resolve().parent
if str(UNIT_DIR) not in sys.path:
    sys.path.insert(0, str(UNIT_DIR))

from fakes import FailingSink, RecordingSink


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    """Sink that refuses the very first byte written to it."""

    return FailingSink(budget=0)


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log_records(log_stream: io.StringIO):
    """Return a callable decoding every JSON line written to ``log_stream`` so far."""

    def _records():
        return [json.loads(line) for line in log_stream.getvalue().splitlines() if line]

    return _records
