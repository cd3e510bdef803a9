"""Character fetcher contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The orchestrator depends on this abstraction only, so the HTTP adapter and
  in-memory test doubles are interchangeable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FetchOutcome, FetchRequest


@runtime_checkable
class CharacterFetcher(Protocol):
    """Minimal contract for the remote collection.

    Design rules:
    - `fetch` is async because it performs I/O (HTTP).
    - It always resolves to a `FetchSuccess` or a `FetchFailure`; it never
      raises across the boundary. Cancellation is the only exception and is
      how the caller abandons a superseded request.
    - One call, one outcome: no retries.
    """

    async def fetch(self, request: FetchRequest) -> FetchOutcome:
        """Run one query for `request` and return its normalized outcome."""

        ...
