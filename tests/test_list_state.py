import pytest

from core.list_state import ListState, PageResult, build_params, normalize_filters


def _load(state, total, page=1, search="", filters=None, items=None):
    ticket = state.begin(page, search, filters or {})
    state.apply(ticket, PageResult(items or [], total))
    return ticket


def test_build_params_drops_empty_values():
    params = build_params("  maria ", {"status": None, "country": "  ", "curso": " Laser "})
    assert params == {"search": "maria", "curso": "Laser"}
    assert build_params("   ", {}) == {}


def test_normalize_filters_keeps_false_and_zero():
    assert normalize_filters({"pagamentoOk": False, "minPrice": 0}) == {
        "pagamentoOk": False,
        "minPrice": 0,
    }


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        ListState(page_size=0)


def test_showing_range_and_pages():
    state = ListState(page_size=20)
    _load(state, total=45, page=3, items=list(range(5)))
    assert state.total_pages == 3
    assert state.showing_from == 41
    assert state.showing_to == 45
    assert not state.can_go_next
    assert state.can_go_previous


def test_empty_result_shows_zero_range():
    state = ListState(page_size=20)
    _load(state, total=0)
    assert state.total_pages == 1
    assert (state.showing_from, state.showing_to) == (0, 0)


def test_stale_response_is_ignored():
    state = ListState(page_size=10)
    first = state.begin(1, "ana", {})
    second = state.begin(1, "anabela", {})

    assert not state.apply(first, PageResult(["old"], 1))
    assert state.rows == []
    assert state.apply(second, PageResult(["new"], 1))
    assert state.rows == ["new"]
    assert state.committed_search == "anabela"


def test_stale_failure_does_not_touch_state():
    state = ListState()
    first = state.begin(1, "", {})
    state.begin(1, "x", {})
    assert not state.fail(first, "boom")
    assert state.error is None
    assert state.loading


def test_failure_restores_previous_page():
    state = ListState(page_size=10)
    _load(state, total=30, page=2)
    ticket = state.begin(3, "", {})
    state.fail(ticket, "erro")
    assert state.page == 2
    assert state.error == "erro"
    assert not state.loading


def test_failed_search_can_be_requested_again():
    state = ListState()
    _load(state, total=1)
    state.set_search("x")
    ticket = state.begin(1, "x", {})
    state.fail(ticket, "offline")

    assert state.is_dirty
    assert state.needs_auto_fetch()


def test_failed_clamp_keeps_last_valid_page():
    state = ListState(page_size=10)
    _load(state, total=100)
    _load(state, total=20, page=5)
    assert state.needs_clamp

    clamp = state.clamp_query()
    ticket = state.begin(clamp.page, clamp.search, clamp.filters)
    state.fail(ticket, "erro")
    assert state.page == 2
    assert state.effective_page == 2


def test_dirty_tracking_ignores_whitespace():
    state = ListState()
    _load(state, total=1, search="ana")
    state.set_search("  ana ")
    assert not state.is_search_dirty
    state.set_filter("status", "")
    assert not state.are_filters_dirty
    state.set_filter("status", "BOOKED")
    assert state.is_dirty


def test_refresh_query_resets_to_first_page_when_dirty():
    state = ListState(page_size=10)
    _load(state, total=50, page=4)
    assert state.refresh_query().page == 4
    state.set_search("novo")
    query = state.refresh_query()
    assert query.page == 1
    assert query.search == "novo"


def test_page_query_respects_bounds_and_loading():
    state = ListState(page_size=10)
    _load(state, total=25)
    assert state.page_query(0) is None
    assert state.page_query(4) is None
    assert state.page_query(1) is None
    assert state.page_query(2).page == 2
    state.begin(2, "", {})
    assert state.page_query(3) is None


def test_clamp_after_total_shrinks():
    state = ListState(page_size=10)
    _load(state, total=31, page=4)
    _load(state, total=12, page=4)
    assert state.effective_page == 2
    clamp = state.clamp_query()
    assert clamp is not None and clamp.page == 2


def test_auto_fetch_only_when_draft_differs_from_dispatched():
    state = ListState()
    _load(state, total=3, search="ana")
    state.set_search("anab")
    assert state.needs_auto_fetch()
    state.set_search("ana")
    assert not state.needs_auto_fetch()


def test_clear_filters_restores_defaults():
    state = ListState(default_filters={"onlyActive": True})
    state.set_filter("onlyActive", None)
    state.set_filter("country", "Brasil")
    state.clear_filters()
    assert state.draft_filters == {"onlyActive": True}
    assert state.draft_query().filters == {"onlyActive": True}
