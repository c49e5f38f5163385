from PySide6.QtWidgets import QCheckBox, QLineEdit, QPlainTextEdit

from services.dto import CALENDAR_TYPES
from services.validators import local_to_iso_utc, optional_text, require, validate_period
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.combo_helpers import create_enum_combo
from ui.common.date_utils import make_optional_datetime_edit


class CalendarEntryForm(BaseEditForm):
    """Запись календаря: доступность, поездка или блокировка."""

    ENTITY_KEY = "nav.calendar"

    def build_form(self):
        self.add_field("title", QLineEdit())
        self.add_field("type", create_enum_combo(CALENDAR_TYPES))
        self.add_field("start", make_optional_datetime_edit())
        self.add_field("end", make_optional_datetime_edit())
        self.add_field("all_day", QCheckBox())
        self.add_field("timezone", QLineEdit())
        self.add_field("country", QLineEdit())
        self.add_field("city", QLineEdit())
        self.add_field("location", QLineEdit())
        self.add_field("description", QPlainTextEdit())
        self.add_field("notes", QPlainTextEdit())

    def build_payload(self, data: dict) -> dict:
        title = require(data["title"], "title")
        start, end = validate_period(data["start"], data["end"])
        return compact_payload(
            {
                "title": title,
                "description": optional_text(data["description"]),
                "type": data["type"],
                "start": local_to_iso_utc(start),
                "end": local_to_iso_utc(end),
                "allDay": bool(data["all_day"]),
                "timezone": optional_text(data["timezone"]),
                "country": optional_text(data["country"]),
                "city": optional_text(data["city"]),
                "location": optional_text(data["location"]),
                "notes": optional_text(data["notes"]),
            }
        )
