from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.common.styled_widgets import styled_button
from ui.forms.client_form import ClientForm
from ui.i18n import tr
from ui.views.client_detail_view import ClientDetailDialog


class ClientTableView(BaseTableView):
    TITLE_KEY = "nav.clients"
    SERVICE = "client_service"
    FORM_CLASS = ClientForm
    COLUMNS = (
        Column("name", "field.name"),
        Column("email", "field.email"),
        Column("phone", "field.phone"),
        Column("country", "field.country"),
        Column("source", "field.source"),
        Column("status", "field.status"),
        Column("score", "field.score"),
        Column("created_at", "field.created_at"),
    )

    def build_extra_actions(self, toolbar):
        self.detail_btn = styled_button(tr("clients.open_detail"), icon="📋")
        self.detail_btn.clicked.connect(self.open_detail)
        toolbar.addWidget(self.detail_btn)

    def open_detail(self):
        client = self._require_selection()
        if client is None:
            return
        ClientDetailDialog(
            self.service, client.id, executor=self.executor, parent=self
        ).exec()
