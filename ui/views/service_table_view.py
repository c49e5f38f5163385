from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.service_offering_form import SERVICE_COUNTRIES, ServiceOfferingForm
from utils.money import format_money


def format_duration(minutes: int | None) -> str:
    if not minutes:
        return "--"
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest:02d}min" if rest else f"{hours}h"


class ServiceTableView(BaseTableView):
    """Прайс-лист; по умолчанию только активные позиции."""

    TITLE_KEY = "nav.services"
    SERVICE = "offering_service"
    FORM_CLASS = ServiceOfferingForm
    COLUMNS = (
        Column("name", "field.name"),
        Column("category", "field.category"),
        Column("country", "field.country"),
        Column("price", "field.price", getter=lambda o: format_money(o.price, o.currency)),
        Column("duration_minutes", "field.duration", formatter=format_duration),
        Column("active", "field.active"),
    )
    FILTERS = (
        FilterSpec(
            "country",
            "field.country",
            choices=tuple((name, name) for name in SERVICE_COUNTRIES),
        ),
        FilterSpec("category", "field.category", kind="text"),
        FilterSpec("onlyActive", "filter.only_active", kind="check", default=True),
        FilterSpec("minPrice", "filter.min_price", kind="text"),
        FilterSpec("maxPrice", "filter.max_price", kind="text"),
    )
