from services.dto import LEAD_STAGES
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.forms.lead_form import LeadForm
from ui.i18n import tr_enum


class LeadTableView(BaseTableView):
    TITLE_KEY = "nav.leads"
    SERVICE = "lead_service"
    FORM_CLASS = LeadForm
    COLUMNS = (
        Column("display_name", "field.client"),
        Column("stage", "field.stage", formatter=tr_enum),
        Column("source", "field.source"),
        Column("notes", "field.notes"),
        Column("score", "field.score"),
        Column("created_at", "field.created_at"),
    )
    FILTERS = (FilterSpec("stage", "field.stage", choices=LEAD_STAGES),)

    def create_form(self, instance=None):
        return LeadForm(
            self.service,
            instance,
            client_service=self.context.resource("client_service"),
            executor=self.executor,
            parent=self,
        )
