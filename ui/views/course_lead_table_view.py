from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.course_lead_form import CourseLeadForm


class CourseLeadTableView(BaseTableView):
    TITLE_KEY = "nav.course_leads"
    SERVICE = "course_lead_service"
    FORM_CLASS = CourseLeadForm
    COLUMNS = (
        Column("full_name", "field.full_name"),
        Column("origin", "field.source"),
        Column("phone", "field.phone"),
        Column("email", "field.email"),
        Column("country", "field.country"),
        Column("note", "field.note"),
        Column("created_at", "field.created_at"),
    )
