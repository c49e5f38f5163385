from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from services.dto import LEAD_STAGES
from services.validators import ValidationError, optional_text
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.client_picker import ClientPicker
from ui.common.combo_helpers import create_enum_combo, set_selected_by_id


class LeadForm(BaseEditForm):
    """Лид всегда привязан к клиенту, выбранному через поиск."""

    ENTITY_KEY = "nav.leads"

    def __init__(self, service, instance=None, *, client_service, executor=None, parent=None):
        self.client_service = client_service
        super().__init__(service, instance, executor=executor, parent=parent)

    def build_form(self):
        self.client_picker = self.add_field(
            "client", ClientPicker(self.client_service, executor=self.executor)
        )
        self.add_field("stage", create_enum_combo(LEAD_STAGES))
        self.add_field("source", QLineEdit())
        self.add_field("notes", QPlainTextEdit())
        self.client_picker.search_now()

    def fill_from_obj(self, obj):
        self.client_picker.set_client(obj.client_id, obj.client_name)
        set_selected_by_id(self.fields["stage"], obj.stage)
        self.set_widget_value(self.fields["source"], obj.source)
        self.set_widget_value(self.fields["notes"], obj.notes)

    def build_payload(self, data: dict) -> dict:
        if not data["client"]:
            raise ValidationError("required", "client")
        return compact_payload(
            {
                "clientId": data["client"],
                "stage": data["stage"] or LEAD_STAGES[0],
                "source": optional_text(data["source"]),
                "notes": optional_text(data["notes"]),
            }
        )
