from services.dto import APPOINTMENT_STATUSES
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.appointment_form import AppointmentForm
from ui.i18n import tr_enum


class AppointmentTableView(BaseTableView):
    TITLE_KEY = "nav.appointments"
    SERVICE = "appointment_service"
    FORM_CLASS = AppointmentForm
    COLUMNS = (
        Column("client_name", "field.client"),
        Column("procedure", "field.procedure"),
        Column("type", "field.type", formatter=tr_enum),
        Column("status", "field.status", formatter=tr_enum),
        Column("start", "field.start"),
        Column("end", "field.end"),
        Column("country", "field.country"),
        Column("meeting_link", "field.meeting_link"),
    )
    FILTERS = (
        FilterSpec("status", "field.status", choices=APPOINTMENT_STATUSES),
        FilterSpec("start", "field.start", kind="date"),
        FilterSpec("end", "field.end", kind="date", end_of_day=True),
    )

    def object_label(self, obj) -> str:
        return obj.procedure

    def create_form(self, instance=None):
        return AppointmentForm(
            self.service,
            instance,
            client_service=self.context.resource("client_service"),
            executor=self.executor,
            parent=self,
        )
