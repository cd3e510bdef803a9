from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from core.domain.models import (
    Character,
    CharacterPage,
    FetchFailure,
    FetchOutcome,
    FetchRequest,
    FetchSuccess,
)

DEBOUNCE = 0.05


def make_characters(count: int, *, start: int = 1, prefix: str = "Character") -> tuple[Character, ...]:
    return tuple(
        Character(
            id=i,
            name=f"{prefix} {i}",
            status="Alive",
            species="Human",
            gender="Female" if i % 2 else "Male",
        )
        for i in range(start, start + count)
    )


def make_success(count: int = 20, *, total: int = 826, pages: int = 42, prefix: str = "Character") -> FetchSuccess:
    return FetchSuccess(
        payload=CharacterPage(
            results=make_characters(count, prefix=prefix),
            total_count=total,
            page_count=pages,
        )
    )


class FakeFetcher:
    """In-memory fetcher.

    Automatic mode answers every request with `respond(request)`. Manual mode
    parks each call on a future that the test resolves with `resolve()`.
    With `ignore_cancel=True` a cancelled call keeps waiting for its result,
    which simulates a response that arrives after being superseded.
    """

    def __init__(
        self,
        respond: Callable[[FetchRequest], FetchOutcome] | None = None,
        *,
        manual: bool = False,
        ignore_cancel: bool = False,
    ) -> None:
        self._respond = respond or (lambda _request: make_success())
        self._manual = manual
        self._ignore_cancel = ignore_cancel
        self.requests: list[FetchRequest] = []
        self.calls: list[asyncio.Future[FetchOutcome]] = []
        self.cancelled: list[FetchRequest] = []

    async def fetch(self, request: FetchRequest) -> FetchOutcome:
        self.requests.append(request)
        if not self._manual:
            await asyncio.sleep(0)
            return self._respond(request)

        future: asyncio.Future[FetchOutcome] = asyncio.get_running_loop().create_future()
        self.calls.append(future)
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            self.cancelled.append(request)
            if not self._ignore_cancel:
                raise
            return await future

    def resolve(self, index: int, outcome: FetchOutcome) -> None:
        self.calls[index].set_result(outcome)


async def settle(rounds: int = 5) -> None:
    """Let pending callbacks and tasks run."""

    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def manual_fetcher() -> FakeFetcher:
    return FakeFetcher(manual=True)


@pytest.fixture
def not_found() -> FetchFailure:
    return FetchFailure.not_found()
