from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from services.validators import optional_text, require
from ui.base.base_edit_form import BaseEditForm, compact_payload


class CourseLeadForm(BaseEditForm):
    ENTITY_KEY = "nav.course_leads"

    def build_form(self):
        self.add_field("full_name", QLineEdit())
        self.add_field("source", QLineEdit())
        self.add_field("phone", QLineEdit())
        self.add_field("country", QLineEdit())
        self.add_field("email", QLineEdit())
        self.add_field("note", QPlainTextEdit())

    def fill_from_obj(self, obj):
        super().fill_from_obj(obj)
        self.set_widget_value(self.fields["source"], obj.origin)

    def build_payload(self, data: dict) -> dict:
        return compact_payload(
            {
                "nomeCompleto": require(data["full_name"], "full_name"),
                "origem": optional_text(data["source"]),
                "telefone": optional_text(data["phone"]),
                "pais": optional_text(data["country"]),
                "email": optional_text(data["email"]),
                "nota": optional_text(data["note"]),
            }
        )
