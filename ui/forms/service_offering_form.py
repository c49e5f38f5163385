from PySide6.QtWidgets import QCheckBox, QComboBox, QLineEdit, QPlainTextEdit

from services.validators import optional_text, parse_decimal, parse_int, require
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.combo_helpers import create_editable_combo

SERVICE_COUNTRIES = ("Brasil", "Panama", "Colombia")
# код валюты → подпись
SERVICE_CURRENCIES = {"BRL": "Brasil (BRL)", "COP": "Colombia (COP)", "USD": "Panama (USD)"}
DEFAULT_CURRENCY = "USD"


class ServiceOfferingForm(BaseEditForm):
    """Позиция прайс-листа клиники."""

    ENTITY_KEY = "nav.services"

    def build_form(self):
        self.add_field("name", QLineEdit())
        self.add_field("category", QLineEdit())
        self.add_field("country", create_editable_combo(SERVICE_COUNTRIES))
        currency = QComboBox()
        for code, label in SERVICE_CURRENCIES.items():
            currency.addItem(label, code)
        currency.setCurrentIndex(currency.findData(DEFAULT_CURRENCY))
        self.add_field("currency", currency)
        self.add_field("price", QLineEdit())
        self.add_field("duration", QLineEdit())
        active = QCheckBox()
        active.setChecked(True)
        self.add_field("active", active)
        self.add_field("description", QPlainTextEdit())
        self.add_field("notes", QPlainTextEdit())

    def fill_from_obj(self, obj):
        super().fill_from_obj(obj)
        self.set_widget_value(self.fields["duration"], obj.duration_minutes)

    def build_payload(self, data: dict) -> dict:
        name = require(data["name"], "name")
        price = parse_decimal(data["price"], "price")
        return compact_payload(
            {
                "name": name,
                "description": optional_text(data["description"]),
                "category": optional_text(data["category"]),
                "country": optional_text(data["country"]),
                "currency": data["currency"] or DEFAULT_CURRENCY,
                "price": float(price),
                "durationMinutes": parse_int(data["duration"], "duration"),
                "notes": optional_text(data["notes"]),
                "active": bool(data["active"]),
            }
        )
