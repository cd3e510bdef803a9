"""Search debouncing.

Raw search text arrives once per keystroke. The debouncer keeps a single
timer task: every new value cancels the pending timer and starts a fresh
one, so only the value that survives a full quiet period is emitted.
Emissions equal to the previously emitted value are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.2


class SearchDebouncer:
    """Debounce + distinct-until-changed over a stream of search terms."""

    def __init__(
        self,
        on_emit: Callable[[str], None],
        *,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._on_emit = on_emit
        self._delay = delay
        self._timer: asyncio.Task[None] | None = None
        self._last: str | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def last_emitted(self) -> str | None:
        return self._last

    @property
    def pending(self) -> asyncio.Task[None] | None:
        """The running timer task, if a value is waiting for its quiet period."""

        if self._timer is not None and not self._timer.done():
            return self._timer
        return None

    def prime(self, value: str) -> None:
        """Take `value` as already emitted: the distinct baseline.

        The owner is responsible for acting on the primed value itself.
        """

        self._cancel_timer()
        self._last = value

    def push(self, value: str) -> None:
        """Accept one raw value; restarts the quiet period."""

        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.create_task(self._emit_after_delay(value))

    def cancel(self) -> None:
        """Drop the pending value, if any."""

        self._cancel_timer()

    async def close(self) -> None:
        timer = self._timer
        self._cancel_timer()
        if timer is not None:
            await asyncio.gather(timer, return_exceptions=True)

    async def _emit_after_delay(self, value: str) -> None:
        await asyncio.sleep(self._delay)
        self._timer = None
        if value == self._last:
            logger.debug("Search term %r unchanged, not emitting", value)
            return
        self._last = value
        self._on_emit(value)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
