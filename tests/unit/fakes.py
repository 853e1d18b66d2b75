"""In-memory sinks used by unit tests.

What:
  Provide sink doubles that record, refuse, or partially accept writes so the
  grammar layers can be observed without touching files.

Why:
  Several invariants are about what reaches the caller's sink: nothing from a
  failed alternative, everything from the winning one, and an immediate abort
  when the sink itself fails. Those need sinks that remember each write or
  fail on demand.

How:
  :class:`RecordingSink` keeps every chunk it receives; :class:`FailingSink`
  raises :class:`OSError` once a byte budget is exhausted, emulating a full
  disk or a closed pipe.

Interfaces:
  :class:`RecordingSink`, :class:`FailingSink`.
"""

from __future__ import annotations

from typing import List


class RecordingSink:
    """Sink remembering each ``write`` call separately."""

    def __init__(self) -> None:
        self.chunks: List[bytes] = []

    def write(self, data: bytes) -> int:
        self.chunks.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


class FailingSink:
    """Sink accepting ``budget`` bytes, then raising :class:`OSError`."""

    def __init__(self, budget: int = 0) -> None:
        self.budget = budget
        self.received = bytearray()
        self.calls = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        if len(self.received) + len(data) > self.budget:
            raise OSError(28, "No space left on device")
        self.received += data
        return len(data)
