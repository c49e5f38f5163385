from core.list_state import PageResult
from infrastructure.api_client import ApiError
from ui.base.table_controller import TableController


class _Fetcher:
    def __init__(self):
        self.calls = []

    def __call__(self, page, limit, search=None, **filters):
        self.calls.append((page, limit, search, filters))
        return PageResult([f"row{page}"], 45)


def _controller(manual_executor, **kwargs):
    fetcher = _Fetcher()
    controller = TableController(
        fetcher, page_size=20, debounce_ms=300, executor=manual_executor, **kwargs
    )
    return controller, fetcher


def test_load_data_dispatches_first_page(qapp, manual_executor):
    controller, fetcher = _controller(manual_executor)
    loading = []
    controller.loading_changed.connect(loading.append)

    controller.load_data()
    assert controller.state.loading
    manual_executor.run()

    assert fetcher.calls == [(1, 20, None, {})]
    assert controller.rows == ["row1"]
    assert loading == [True, False]


def test_search_waits_for_debounce(qapp, manual_executor):
    controller, fetcher = _controller(manual_executor)
    controller.on_search_changed("ma")
    controller.on_search_changed("mar")
    assert controller.is_debounce_pending
    assert manual_executor.pending == 0

    controller.flush_pending()
    manual_executor.run()
    assert fetcher.calls == [(1, 20, "mar", {})]


def test_returning_to_dispatched_value_skips_fetch(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.run()

    controller.on_search_changed("x")
    controller.on_search_changed("")
    controller.flush_pending()
    assert manual_executor.pending == 0


def test_only_latest_response_is_rendered(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    changes = []
    controller.data_changed.connect(lambda: changes.append(list(controller.rows)))

    controller.on_search_changed("a")
    controller.flush_pending()
    controller.on_search_changed("ab")
    controller.flush_pending()
    assert manual_executor.pending == 2

    manual_executor.resolve(1, PageResult(["latest"], 1))
    manual_executor.resolve(0, PageResult(["stale"], 1))
    assert changes == [["latest"]]
    assert controller.state.committed_search == "ab"


def test_filter_change_resets_to_first_page(qapp, manual_executor):
    controller, fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.run()
    assert controller.next_page()
    manual_executor.run()
    assert controller.state.page == 2

    controller.on_filter_changed("status", "BOOKED")
    controller.flush_pending()
    manual_executor.run()
    assert fetcher.calls[-1] == (1, 20, None, {"status": "BOOKED"})


def test_next_page_blocked_while_loading(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.run()
    assert controller.next_page()
    assert not controller.next_page()
    assert manual_executor.pending == 1


def test_shrunk_total_triggers_clamp_fetch(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.resolve(0, PageResult([], 100))
    controller.change_page(5)
    manual_executor.resolve(0, PageResult([], 30))

    assert manual_executor.pending == 1
    manual_executor.run()
    assert controller.state.page == 2
    assert not controller.state.loading


def test_error_keeps_previous_rows(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    errors = []
    controller.error_changed.connect(errors.append)
    controller.load_data()
    manual_executor.run()

    controller.refresh()
    manual_executor.reject(0, ApiError(None, "timeout"))
    assert controller.rows == ["row1"]
    assert controller.state.error
    assert errors[-1] == controller.state.error


def test_clear_filters_fetches_immediately_with_defaults(qapp, manual_executor):
    controller, fetcher = _controller(manual_executor, default_filters={"onlyActive": True})
    controller.load_data()
    manual_executor.run()
    controller.on_filter_changed("onlyActive", None)
    controller.flush_pending()
    manual_executor.run()

    controller.clear_filters()
    assert not controller.is_debounce_pending
    manual_executor.run()
    assert fetcher.calls[-1] == (1, 20, None, {"onlyActive": True})


def test_search_retried_after_failure(qapp, manual_executor):
    controller, fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.run()

    controller.on_search_changed("x")
    controller.flush_pending()
    manual_executor.reject(0, ApiError(None, "offline"))
    assert controller.state.error

    controller.on_search_changed("x ")
    controller.flush_pending()
    assert manual_executor.pending == 1
    manual_executor.run()
    assert [call[2] for call in fetcher.calls] == [None, "x", "x"]
    assert controller.state.committed_search == "x"
    assert not controller.state.is_dirty


def test_debounce_timer_fires_once_after_last_edit(qapp, manual_executor):
    from PySide6.QtTest import QTest

    fetcher = _Fetcher()
    controller = TableController(
        fetcher, page_size=20, debounce_ms=100, executor=manual_executor
    )
    for text in ("a", "ab", "abc"):
        controller.on_search_changed(text)
        QTest.qWait(30)
    assert manual_executor.pending == 0

    QTest.qWait(250)
    assert manual_executor.pending == 1
    manual_executor.run()
    assert fetcher.calls == [(1, 20, "abc", {})]


def test_failed_clamp_fetch_shows_last_page(qapp, manual_executor):
    controller, _fetcher = _controller(manual_executor)
    controller.load_data()
    manual_executor.resolve(0, PageResult([], 100))
    controller.change_page(5)
    manual_executor.resolve(0, PageResult([], 30))
    assert manual_executor.pending == 1

    manual_executor.reject(0, ApiError(None, "timeout"))
    assert controller.state.page == 2
    assert controller.state.effective_page == 2
    assert controller.state.error
