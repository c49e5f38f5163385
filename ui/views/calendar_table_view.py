from services.dto import CALENDAR_TYPES
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.calendar_form import CalendarEntryForm
from ui.i18n import tr_enum


class CalendarTableView(BaseTableView):
    TITLE_KEY = "nav.calendar"
    SERVICE = "calendar_service"
    FORM_CLASS = CalendarEntryForm
    PAGE_SIZE = 10
    COLUMNS = (
        Column("title", "field.title"),
        Column("type", "field.type", formatter=tr_enum),
        Column("start", "field.start"),
        Column("end", "field.end"),
        Column("all_day", "field.all_day"),
        Column("country", "field.country"),
        Column("city", "field.city"),
        Column("location", "field.location"),
    )
    FILTERS = (
        FilterSpec("type", "field.type", choices=CALENDAR_TYPES),
        FilterSpec("onlyFuture", "filter.only_future", kind="check"),
    )
