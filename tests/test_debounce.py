from __future__ import annotations

import asyncio

import pytest

from conftest import DEBOUNCE
from core.services.debounce import SearchDebouncer


def _debouncer() -> tuple[SearchDebouncer, list[str]]:
    emitted: list[str] = []
    return SearchDebouncer(emitted.append, delay=DEBOUNCE), emitted


async def test_prime_sets_baseline_without_emitting() -> None:
    debouncer, emitted = _debouncer()

    debouncer.prime("rick")

    assert emitted == []
    assert debouncer.last_emitted == "rick"
    assert debouncer.pending is None


async def test_burst_emits_only_the_last_value() -> None:
    debouncer, emitted = _debouncer()
    debouncer.prime("")

    for text in ("r", "ri", "ric", "rick"):
        debouncer.push(text)
        await asyncio.sleep(DEBOUNCE / 5)

    assert emitted == []
    await asyncio.sleep(DEBOUNCE * 2)
    assert emitted == ["rick"]


async def test_repeated_value_is_suppressed() -> None:
    debouncer, emitted = _debouncer()
    debouncer.prime("")

    debouncer.push("morty")
    await asyncio.sleep(DEBOUNCE * 2)
    debouncer.push("morty")
    await asyncio.sleep(DEBOUNCE * 2)

    assert emitted == ["morty"]


async def test_returning_to_the_primed_value_emits_nothing() -> None:
    debouncer, emitted = _debouncer()
    debouncer.prime("")

    debouncer.push("a")
    debouncer.push("")
    await asyncio.sleep(DEBOUNCE * 2)

    assert emitted == []


async def test_first_value_without_prime_is_emitted() -> None:
    debouncer, emitted = _debouncer()

    debouncer.push("")
    await asyncio.sleep(DEBOUNCE * 2)

    assert emitted == [""]


async def test_cancel_drops_pending_value() -> None:
    debouncer, emitted = _debouncer()
    debouncer.prime("")

    debouncer.push("summer")
    assert debouncer.pending is not None
    debouncer.cancel()
    await asyncio.sleep(DEBOUNCE * 2)

    assert emitted == []
    assert debouncer.pending is None


async def test_close_waits_for_timer_release() -> None:
    debouncer, emitted = _debouncer()
    debouncer.push("beth")
    timer = debouncer.pending

    await debouncer.close()

    assert timer is not None and timer.cancelled()
    assert emitted == []


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        SearchDebouncer(lambda _value: None, delay=-1)
