from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from services.dto import KNOWLEDGE_STATUSES
from services.validators import optional_text, parse_int, parse_tags, require
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.combo_helpers import create_enum_combo

DEFAULT_LANGUAGE = "pt-BR"


class KnowledgeEntryForm(BaseEditForm):
    """Статья базы знаний для ассистента клиники."""

    ENTITY_KEY = "nav.knowledge"

    def build_form(self):
        self.add_field("title", QLineEdit())
        self.add_field("slug", QLineEdit())
        self.add_field("status", create_enum_combo(KNOWLEDGE_STATUSES))
        self.add_field("priority", QLineEdit("0"))
        self.add_field("category", QLineEdit())
        self.add_field("audience", QLineEdit())
        self.add_field("language", QLineEdit(DEFAULT_LANGUAGE))
        self.add_field("tags", QLineEdit())
        self.add_field("source_url", QLineEdit())
        self.add_field("summary", QPlainTextEdit())
        self.add_field("content", QPlainTextEdit())

    def build_payload(self, data: dict) -> dict:
        title = require(data["title"], "title")
        priority = parse_int(data["priority"], "priority", required=True)
        content = require(data["content"], "content")
        return compact_payload(
            {
                "title": title,
                "slug": optional_text(data["slug"]),
                "summary": optional_text(data["summary"]),
                "content": content,
                "tags": parse_tags(data["tags"]),
                "category": optional_text(data["category"]),
                "audience": optional_text(data["audience"]),
                "language": optional_text(data["language"]),
                "status": data["status"],
                "priority": priority,
                "sourceUrl": optional_text(data["source_url"]),
            }
        )
