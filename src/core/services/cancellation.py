"""Switch-to-latest execution.

`SwitchLatest` runs at most one coroutine at a time. Starting a new one
cancels the previous task and bumps a generation counter; the coroutine gets
its generation as a token and must check `is_current(token)` before touching
shared state. Cancelling stops the I/O, the token check covers a result that
was already on its way back.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine

TaskFactory = Callable[[int], Coroutine[Any, Any, None]]


class SwitchLatest:
    def __init__(self, name: str = "switch-latest") -> None:
        self._name = name
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._abandoned: set[asyncio.Task[None]] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> asyncio.Task[None] | None:
        """The latest task while it is still running."""

        if self._task is not None and not self._task.done():
            return self._task
        return None

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def run(self, factory: TaskFactory) -> asyncio.Task[None]:
        """Cancel whatever is running and start `factory(token)`."""

        self.cancel()
        token = self._generation
        loop = asyncio.get_running_loop()
        task = loop.create_task(factory(token), name=f"{self._name}-{token}")
        self._task = task
        return task

    def cancel(self) -> None:
        """Abandon the running task and invalidate its token."""

        self._generation += 1
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        self._abandoned.add(task)
        task.add_done_callback(self._abandoned.discard)

    async def drain(self) -> None:
        """Wait until every task started here has finished or been cancelled."""

        tasks = [*self._abandoned]
        if self._task is not None:
            tasks.append(self._task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
