from types import SimpleNamespace

from config import Settings
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec, date_filter_value
from ui.common.workers import SyncExecutor
from ui.views.user_table_view import UserTableView


class _Row(SimpleNamespace):
    pass


class _DemoView(BaseTableView):
    COLUMNS = (Column("name", "field.name"), Column("status", "field.status"))
    FILTERS = (
        FilterSpec("status", "field.status", choices=("NEW", "WON")),
        FilterSpec("onlyActive", "filter.only_active", kind="check", default=True),
        FilterSpec("country", "field.country", kind="text"),
    )
    PAGE_SIZE = 10
    DEBOUNCE_MS = 0


def _context():
    return SimpleNamespace(settings=Settings())


def _view(service, executor):
    return _DemoView(context=_context(), service=service, executor=executor)


def test_initial_load_uses_default_filters(qapp, recording_service, manual_executor):
    service = recording_service([_Row(id="1", name="Maria", status="NEW")], total=1)
    view = _view(service, manual_executor)
    manual_executor.run()

    assert service.calls == [{"page": 1, "limit": 10, "search": None, "onlyActive": True}]
    assert view.model.rowCount() == 1
    assert view.selected_object() is None
    assert not view.empty_label.isVisibleTo(view)


def test_filter_widgets_feed_the_query(qapp, recording_service, manual_executor):
    service = recording_service()
    view = _view(service, manual_executor)
    manual_executor.run()

    combo = view.filter_widgets["status"]
    combo.setCurrentIndex(combo.findData("WON"))
    view.filter_widgets["country"].setText(" Brasil ")
    view.controller.flush_pending()
    manual_executor.run()

    assert service.calls[-1] == {
        "page": 1,
        "limit": 10,
        "search": None,
        "onlyActive": True,
        "status": "WON",
        "country": "Brasil",
    }


def test_clear_filters_resets_widgets_and_fetches(qapp, recording_service, manual_executor):
    service = recording_service()
    view = _view(service, manual_executor)
    manual_executor.run()
    view.filter_widgets["onlyActive"].setChecked(False)
    view.controller.flush_pending()
    manual_executor.run()

    view.clear_filters()
    assert view.filter_widgets["onlyActive"].isChecked()
    manual_executor.run()
    assert service.calls[-1]["onlyActive"] is True


def test_load_error_is_shown_inline(qapp, recording_service):
    from infrastructure.api_client import ApiError

    service = recording_service()
    service.error = ApiError(None, "offline")
    view = _view(service, SyncExecutor())
    assert view.error_label.text()
    assert view.model.rowCount() == 0


def test_date_filter_value_covers_whole_day():
    from datetime import date

    start = date_filter_value(date(2024, 5, 1))
    end = date_filter_value(date(2024, 5, 1), end_of_day=True)
    assert start.endswith("Z") and end.endswith("Z")
    assert start < end
    assert date_filter_value(None) is None


def test_user_view_blocks_self_delete(qapp, recording_service, admin_user):
    context = SimpleNamespace(
        settings=Settings(), session=SimpleNamespace(user=admin_user)
    )
    view = UserTableView(
        context=context, service=recording_service(), executor=SyncExecutor(), auto_load=False
    )
    assert view.controller.debounce_ms == 400
    assert view.check_can_delete(SimpleNamespace(id=admin_user.id))
    assert view.check_can_delete(SimpleNamespace(id="other")) is None
