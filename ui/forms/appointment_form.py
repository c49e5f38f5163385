"""Форма консультации (appointment).

Онлайн-консультации требуют ссылку на встречу; окончание должно быть позже
начала. Время вводится в локальном поясе и уходит на сервер в UTC.
"""

from PySide6.QtWidgets import QComboBox, QLineEdit

from services.dto import APPOINTMENT_STATUSES, APPOINTMENT_TYPES
from services.validators import local_to_iso_utc, require, validate_appointment
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.client_picker import ClientPicker
from ui.common.combo_helpers import create_enum_combo, set_selected_by_id
from ui.common.date_utils import make_datetime_edit

APPOINTMENT_COUNTRIES = ("Brasil", "Colombia", "Panamá", "França")
CLIENT_SEARCH_LIMIT = 50


class AppointmentForm(BaseEditForm):
    ENTITY_KEY = "nav.appointments"

    def __init__(self, service, instance=None, *, client_service, executor=None, parent=None):
        self.client_service = client_service
        super().__init__(service, instance, executor=executor, parent=parent)

    def build_form(self):
        self.client_picker = self.add_field(
            "client",
            ClientPicker(
                self.client_service, limit=CLIENT_SEARCH_LIMIT, executor=self.executor
            ),
        )
        self.add_field("procedure", QLineEdit())
        self.type_combo = self.add_field("type", create_enum_combo(APPOINTMENT_TYPES))
        self.add_field("status", create_enum_combo(APPOINTMENT_STATUSES))
        self.add_field("start", make_datetime_edit())
        self.add_field("end", make_datetime_edit())
        self.meeting_link_edit = self.add_field("meeting_link", QLineEdit())
        country = QComboBox()
        for name in APPOINTMENT_COUNTRIES:
            country.addItem(name, name)
        self.add_field("country", country)

        self.type_combo.currentIndexChanged.connect(self._update_link_state)
        self._update_link_state()
        self.client_picker.search_now()

    def _update_link_state(self, *_):
        online = self.type_combo.currentData() == "ONLINE"
        if not online:
            self.meeting_link_edit.clear()
        self.meeting_link_edit.setPlaceholderText("https://" if online else "")

    def fill_from_obj(self, obj):
        self.client_picker.set_client(obj.client_id, obj.client_name)
        self.set_widget_value(self.fields["procedure"], obj.procedure)
        set_selected_by_id(self.type_combo, obj.type)
        set_selected_by_id(self.fields["status"], obj.status)
        self.set_widget_value(self.fields["start"], obj.start)
        self.set_widget_value(self.fields["end"], obj.end)
        self.set_widget_value(self.meeting_link_edit, obj.meeting_link)
        set_selected_by_id(self.fields["country"], obj.country or APPOINTMENT_COUNTRIES[0])

    def build_payload(self, data: dict) -> dict:
        client_id = require(data["client"], "client")
        procedure = require(data["procedure"], "procedure")
        meeting_link = validate_appointment(
            data["type"], data["meeting_link"], data["start"], data["end"]
        )
        return compact_payload(
            {
                "clientId": client_id,
                "procedure": procedure,
                "type": data["type"],
                "status": data["status"],
                "start": local_to_iso_utc(data["start"]),
                "end": local_to_iso_utc(data["end"]),
                "meetingLink": meeting_link,
                "country": data["country"] or APPOINTMENT_COUNTRIES[0],
            }
        )
