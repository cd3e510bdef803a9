from __future__ import annotations

from conftest import make_success
from core.domain.models import FetchFailure, FetchRequest, QuerySnapshot
from core.domain.state import QueryState
from core.services.state_store import StateStore


def test_initial_state_is_loading_and_empty() -> None:
    store = StateStore()

    assert store.state is QueryState.LOADING
    assert store.characters == ()
    assert store.total_count == 0


def test_success_replaces_result_set() -> None:
    store = StateStore()
    store.begin_loading(FetchRequest(page=2, name="rick"))

    store.apply(make_success(20, total=107, pages=6))

    assert store.state is QueryState.LOADED
    assert len(store.characters) == 20
    assert store.total_count == 107
    assert store.page_count == 6
    snapshot = store.snapshot()
    assert snapshot.page == 2
    assert snapshot.search == "rick"


def test_begin_loading_clears_previous_results() -> None:
    store = StateStore()
    store.apply(make_success(5, total=5))

    store.begin_loading(FetchRequest(page=1))

    assert store.state is QueryState.LOADING
    assert store.characters == ()
    assert store.total_count == 0
    assert store.page_count == 0


def test_not_found_clears_and_sets_no_data_found() -> None:
    store = StateStore()
    store.apply(make_success(5, total=5))

    store.apply(FetchFailure.not_found())

    assert store.state is QueryState.NO_DATA_FOUND
    assert store.characters == ()
    assert store.total_count == 0


def test_other_failure_clears_and_sets_error() -> None:
    store = StateStore()
    store.apply(make_success(5, total=5))

    store.apply(FetchFailure.other("http 500"))

    assert store.state is QueryState.ERROR
    assert store.characters == ()
    assert store.total_count == 0


def test_observers_receive_consistent_snapshots() -> None:
    store = StateStore()
    seen: list[QuerySnapshot] = []
    unsubscribe = store.subscribe(seen.append)

    store.begin_loading(FetchRequest(page=1, name=""))
    store.apply(make_success(3, total=3))
    unsubscribe()
    store.apply(FetchFailure.other())

    assert [s.state for s in seen] == [QueryState.LOADING, QueryState.LOADED]
    assert len(seen[1].characters) == seen[1].total_count == 3


def test_failing_observer_is_logged_and_others_still_notified(caplog) -> None:
    store = StateStore()
    seen: list[QueryState] = []

    def broken(_snapshot: QuerySnapshot) -> None:
        raise RuntimeError("renderer crashed")

    store.subscribe(broken)
    store.subscribe(lambda snapshot: seen.append(snapshot.state))

    with caplog.at_level("ERROR", logger="core.services.state_store"):
        store.apply(make_success(2, total=2))

    assert store.state is QueryState.LOADED
    assert seen == [QueryState.LOADED]
    assert "State observer" in caplog.text
    assert "renderer crashed" in caplog.text
