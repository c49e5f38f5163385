from PySide6.QtWidgets import QCheckBox, QLineEdit

from services.validators import optional_text, require
from ui.base.base_edit_form import BaseEditForm, compact_payload


class StudentForm(BaseEditForm):
    """Ученик курса (aluno). Ключи API на португальском."""

    ENTITY_KEY = "nav.students"

    def build_form(self):
        self.add_field("full_name", QLineEdit())
        self.add_field("phone", QLineEdit())
        self.add_field("country", QLineEdit())
        self.add_field("email", QLineEdit())
        self.add_field("profession", QLineEdit())
        self.add_field("course", QLineEdit())
        self.add_field("payment_ok", QCheckBox())

    def build_payload(self, data: dict) -> dict:
        return compact_payload(
            {
                "nomeCompleto": require(data["full_name"], "full_name"),
                "telefone": optional_text(data["phone"]),
                "pais": optional_text(data["country"]),
                "email": optional_text(data["email"]),
                "profissao": optional_text(data["profession"]),
                "curso": optional_text(data["course"]),
                "pagamentoOk": bool(data["payment_ok"]),
            }
        )
