from PySide6.QtWidgets import QLineEdit

from services.validators import normalize_email, optional_text
from ui.base.base_edit_form import BaseEditForm, compact_payload


class WaitlistForm(BaseEditForm):
    """Запись листа ожидания: все поля необязательные."""

    ENTITY_KEY = "nav.waitlist"

    def build_form(self):
        self.add_field("name", QLineEdit())
        self.add_field("email", QLineEdit())
        self.add_field("phone", QLineEdit())
        self.add_field("desired_course", QLineEdit())
        self.add_field("country", QLineEdit())

    def build_payload(self, data: dict) -> dict:
        return compact_payload(
            {
                "name": optional_text(data["name"]),
                "email": normalize_email(data["email"]),
                "phone": optional_text(data["phone"]),
                "desiredCourse": optional_text(data["desired_course"]),
                "country": optional_text(data["country"]),
            }
        )
