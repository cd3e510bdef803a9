"""Single source of truth for what the renderer shows.

The store keeps the presentation state, the current result set and the
parameters those results belong to. Every mutation replaces all of them at
once and then notifies observers, so a renderer never sees a `LOADED` state
with a stale list (or the reverse).

Only `QueryOrchestrator` calls the mutating methods; renderers read the
properties or `snapshot()` and subscribe for change notifications.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import (
    Character,
    FailureKind,
    FetchFailure,
    FetchOutcome,
    FetchRequest,
    FetchSuccess,
    QuerySnapshot,
)
from core.domain.state import QueryState

logger = logging.getLogger(__name__)

Observer = Callable[[QuerySnapshot], None]


class StateStore:
    def __init__(self) -> None:
        self._state = QueryState.LOADING
        self._characters: tuple[Character, ...] = ()
        self._total_count = 0
        self._page_count = 0
        self._request = FetchRequest()
        self._observers: list[Observer] = []

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def characters(self) -> tuple[Character, ...]:
        return self._characters

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def request(self) -> FetchRequest:
        """Parameters of the fetch the current state belongs to."""

        return self._request

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call `observer` with a fresh snapshot after every change."""

        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def snapshot(self) -> QuerySnapshot:
        return QuerySnapshot(
            state=self._state,
            characters=self._characters,
            total_count=self._total_count,
            page_count=self._page_count,
            page=self._request.page,
            search=self._request.name,
        )

    def begin_loading(self, request: FetchRequest) -> None:
        """Enter `LOADING` for `request` and clear the result set."""

        self._request = request
        self._replace(QueryState.LOADING)

    def apply(self, outcome: FetchOutcome) -> None:
        """Translate a resolved fetch into the terminal state."""

        if isinstance(outcome, FetchSuccess):
            payload = outcome.payload
            self._replace(
                QueryState.LOADED,
                characters=payload.results,
                total_count=payload.total_count,
                page_count=payload.page_count,
            )
            return
        if isinstance(outcome, FetchFailure) and outcome.kind is FailureKind.NOT_FOUND:
            self._replace(QueryState.NO_DATA_FOUND)
            return
        self._replace(QueryState.ERROR)

    def _replace(
        self,
        state: QueryState,
        *,
        characters: tuple[Character, ...] = (),
        total_count: int = 0,
        page_count: int = 0,
    ) -> None:
        self._state = state
        self._characters = tuple(characters)
        self._total_count = total_count
        self._page_count = page_count
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            # One broken renderer must not stop the others or the fetch task.
            try:
                observer(snapshot)
            except Exception:
                logger.exception("State observer %r failed on %s", observer, state.value)
