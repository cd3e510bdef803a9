"""Query orchestration.

This module turns two independent inputs, free-text search and page number,
into one correctly sequenced stream of remote fetches:

    search keystrokes -> SearchDebouncer -> PageResetCoordinator
        -> QueryOrchestrator (merged with page changes) -> fetcher -> StateStore

Rules enforced here:
- Every settled search term resets the page to 1 without it looking like a
  user pagination, then triggers exactly one fetch.
- Each settled search term opens a new subscription to the page control,
  primed with the current page. User page changes under that subscription
  trigger further fetches.
- A new trigger at either level abandons what was pending beneath it. Only
  the most recent fetch may mutate the store.

Everything runs on one asyncio loop, so no locks are needed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from core.config import AppSettings
from core.domain.models import (
    FailureKind,
    FetchFailure,
    FetchOutcome,
    FetchRequest,
    QuerySnapshot,
)
from core.interfaces.fetcher import CharacterFetcher
from core.services.cancellation import SwitchLatest
from core.services.controls import ValueControl
from core.services.debounce import SearchDebouncer
from core.services.state_store import StateStore

logger = logging.getLogger(__name__)

FIRST_PAGE = 1


def validate_page(page: int) -> int:
    """Return `page` if it is a valid page number, raise `ValueError` otherwise."""

    if isinstance(page, bool) or not isinstance(page, int):
        raise ValueError(f"page must be an integer, got {page!r}")
    if page < FIRST_PAGE:
        raise ValueError(f"page must be >= {FIRST_PAGE}, got {page}")
    return page


class PageResetCoordinator:
    """Resets the page on every settled search term and signals readiness.

    The reset is written with `emit_event=False` so page listeners do not see
    it; the ready signal is what drives the fetch, which is why it fires even
    when the page already was 1.
    """

    def __init__(
        self,
        page_control: ValueControl[int],
        on_ready: Callable[[str], None],
    ) -> None:
        self._page_control = page_control
        self._on_ready = on_ready

    def __call__(self, term: str) -> None:
        if self._page_control.value != FIRST_PAGE:
            logger.debug(
                "Search changed to %r, resetting page %s -> %s",
                term,
                self._page_control.value,
                FIRST_PAGE,
            )
            self._page_control.set_value(FIRST_PAGE, emit_event=False)
        self._on_ready(term)


class QueryOrchestrator:
    """Owns the input controls, the store and the fetch sequencing.

    Usage:

        async with QueryOrchestrator(fetcher) as orchestrator:
            orchestrator.set_search("rick")
            await orchestrator.wait_idle()
            orchestrator.store.snapshot()
    """

    def __init__(
        self,
        fetcher: CharacterFetcher,
        *,
        settings: AppSettings | None = None,
        store: StateStore | None = None,
        search: str = "",
        page: int = FIRST_PAGE,
        debounce_seconds: float | None = None,
    ) -> None:
        validate_page(page)
        if debounce_seconds is None:
            settings = settings or AppSettings()
            debounce_seconds = settings.search_debounce_seconds

        self._fetcher = fetcher
        self.store = store or StateStore()
        self.search_control: ValueControl[str] = ValueControl(search)
        self.page_control: ValueControl[int] = ValueControl(page)

        self._coordinator = PageResetCoordinator(self.page_control, self._on_ready)
        self._debouncer = SearchDebouncer(self._coordinator, delay=debounce_seconds)
        self._fetches = SwitchLatest("character-fetch")

        self._search_term = search
        self._subscription_generation = 0
        self._unsubscribe_page: Callable[[], None] | None = None
        self._unsubscribe_search: Callable[[], None] | None = None
        self._started = False
        self._closed = False

    async def __aenter__(self) -> "QueryOrchestrator":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def page(self) -> int:
        return self.page_control.value

    @property
    def search(self) -> str:
        """Last settled search term (the one sent with requests)."""

        return self._search_term

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> QuerySnapshot:
        return self.store.snapshot()

    def start(self) -> None:
        """Wire the pipeline and issue the initial load.

        Must be called from a running event loop.
        """

        if self._started:
            raise RuntimeError("QueryOrchestrator already started")
        if self._closed:
            raise RuntimeError("QueryOrchestrator is closed")
        self._started = True
        self._unsubscribe_search = self.search_control.subscribe(self._debouncer.push)
        # The primed term skips the page reset so a non-default start page is kept.
        initial = self.search_control.value
        self._debouncer.prime(initial)
        self._on_ready(initial)

    def set_search(self, text: str) -> None:
        """User typed: feed the raw text into the debouncer."""

        self.search_control.set_value(text)

    def change_page(self, page: int) -> None:
        """User paginated: fetch `page` under the current search term."""

        self.page_control.set_value(validate_page(page))

    async def wait_idle(self) -> None:
        """Wait until no search is debouncing and no fetch is in flight."""

        while True:
            timer = self._debouncer.pending
            if timer is not None:
                await asyncio.gather(timer, return_exceptions=True)
                continue
            task = self._fetches.current
            if task is not None:
                await asyncio.gather(task, return_exceptions=True)
                continue
            return

    async def close(self) -> None:
        """Release timers, subscriptions and in-flight calls.

        After this returns nothing can mutate the store any more.
        """

        if self._closed:
            return
        self._closed = True
        if self._unsubscribe_search is not None:
            self._unsubscribe_search()
            self._unsubscribe_search = None
        self._drop_page_subscription()
        self._subscription_generation += 1
        await self._debouncer.close()
        await self._fetches.drain()

    def _on_ready(self, term: str) -> None:
        self._search_term = term
        self._drop_page_subscription()
        self._subscription_generation += 1
        generation = self._subscription_generation

        def on_page(page: int) -> None:
            if generation != self._subscription_generation:
                return
            self._trigger(page)

        self._unsubscribe_page = self.page_control.subscribe(on_page)
        on_page(self.page_control.value)

    def _drop_page_subscription(self) -> None:
        if self._unsubscribe_page is not None:
            self._unsubscribe_page()
            self._unsubscribe_page = None
        self._fetches.cancel()

    def _trigger(self, page: int) -> None:
        request = FetchRequest(page=page, name=self._search_term)
        self.store.begin_loading(request)

        async def fetch(token: int) -> None:
            await self._run_fetch(token, request)

        self._fetches.run(fetch)

    async def _run_fetch(self, token: int, request: FetchRequest) -> None:
        logger.debug("Fetching page=%s name=%r (generation %s)", request.page, request.name, token)
        try:
            outcome = await self._fetcher.fetch(request)
        except Exception as exc:
            logger.exception("Fetcher raised instead of returning an outcome")
            outcome = FetchFailure.other(str(exc))

        if not self._fetches.is_current(token):
            logger.debug("Discarding superseded fetch page=%s name=%r", request.page, request.name)
            return
        self._log_outcome(request, outcome)
        self.store.apply(outcome)

    @staticmethod
    def _log_outcome(request: FetchRequest, outcome: FetchOutcome) -> None:
        if not isinstance(outcome, FetchFailure):
            logger.debug(
                "Loaded %s characters for page=%s name=%r",
                len(outcome.payload.results),
                request.page,
                request.name,
            )
        elif outcome.kind is FailureKind.NOT_FOUND:
            logger.info("No characters found for page=%s name=%r", request.page, request.name)
        else:
            logger.warning(
                "Fetching page=%s name=%r failed: %s",
                request.page,
                request.name,
                outcome.detail or "unknown error",
            )
