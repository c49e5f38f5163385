from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.waitlist_form import WaitlistForm


class WaitlistTableView(BaseTableView):
    TITLE_KEY = "nav.waitlist"
    SERVICE = "waitlist_service"
    FORM_CLASS = WaitlistForm
    COLUMNS = (
        Column("name", "field.name"),
        Column("email", "field.email"),
        Column("phone", "field.phone"),
        Column("desired_course", "field.desired_course"),
        Column("country", "field.country"),
        Column("created_at", "field.created_at"),
    )
    FILTERS = (
        FilterSpec("country", "field.country", kind="text"),
        FilterSpec("desiredCourse", "field.desired_course", kind="text"),
    )
