from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.student_form import StudentForm


class StudentTableView(BaseTableView):
    """Ученики курсов: 50 на страницу, фильтры по курсу, стране и оплате."""

    TITLE_KEY = "nav.students"
    SERVICE = "student_service"
    FORM_CLASS = StudentForm
    PAGE_SIZE = 50
    COLUMNS = (
        Column("full_name", "field.full_name"),
        Column("phone", "field.phone"),
        Column("email", "field.email"),
        Column("country", "field.country"),
        Column("profession", "field.profession"),
        Column("course", "field.course"),
        Column("payment_ok", "field.payment_ok"),
    )
    FILTERS = (
        FilterSpec("curso", "field.course", kind="text"),
        FilterSpec("pais", "field.country", kind="text"),
        FilterSpec("contato", "filter.contact", kind="text"),
        FilterSpec("nome", "field.name", kind="text"),
        FilterSpec(
            "pagamentoOk",
            "field.payment_ok",
            choices=(("filter.paid", True), ("filter.open", False)),
        ),
    )
