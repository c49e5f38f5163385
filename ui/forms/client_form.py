import logging

from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from services.validators import normalize_email, optional_text, parse_int, parse_tags, require
from ui.base.base_edit_form import BaseEditForm, compact_payload


logger = logging.getLogger(__name__)


class ClientForm(BaseEditForm):
    """Форма создания и редактирования клиента (пациента)."""

    ENTITY_KEY = "nav.clients"

    def build_form(self):
        self.name_edit = self.add_field("name", QLineEdit())
        self.email_edit = self.add_field("email", QLineEdit())
        self.phone_edit = self.add_field("phone", QLineEdit())
        self.country_edit = self.add_field("country", QLineEdit())
        self.address_edit = self.add_field("address", QLineEdit())
        self.source_edit = self.add_field("source", QLineEdit())
        self.tags_edit = self.add_field("tags", QLineEdit())
        self.score_edit = self.add_field("score", QLineEdit())
        self.age_edit = self.add_field("age", QLineEdit())
        self.language_edit = self.add_field("language", QLineEdit())
        self.status_edit = self.add_field("status", QLineEdit())
        self.notes_edit = self.add_field("notes", QPlainTextEdit())

    def build_payload(self, data: dict) -> dict:
        payload = {
            "name": require(data["name"], "name"),
            "email": normalize_email(data["email"]),
            "phone": optional_text(data["phone"]),
            "country": optional_text(data["country"]),
            "address": optional_text(data["address"]),
            "source": optional_text(data["source"]),
            "tags": parse_tags(data["tags"]),
            "score": parse_int(data["score"], "score"),
            "age": parse_int(data["age"], "age"),
            "language": optional_text(data["language"]),
            "status": optional_text(data["status"]),
            "notes": optional_text(data["notes"]),
        }
        logger.debug("📤 Данные клиента: %r", payload)
        return compact_payload(payload)
