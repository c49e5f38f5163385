"""Форма создания/редактирования платежа.

• Консультация выбирается из выпадающего списка (до 100 последних).
• Сумма принимается в формате pt-BR: «R$ 1.234,50».
"""

from __future__ import annotations

import logging

from PySide6.QtWidgets import QComboBox, QLineEdit

from services.payment_service import PAYMENT_STATUSES
from services.validators import ValidationError, optional_text, parse_decimal, require
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.combo_helpers import create_enum_combo, populate_combo, set_selected_by_id
from utils.time_utils import format_datetime

logger = logging.getLogger(__name__)

APPOINTMENT_OPTIONS_LIMIT = 100


def appointment_label(appointment) -> str:
    parts = [appointment.procedure or "-"]
    if appointment.client_name:
        parts.append(appointment.client_name)
    if appointment.start:
        parts.append(format_datetime(appointment.start))
    return " · ".join(parts)


class PaymentForm(BaseEditForm):
    """Универсальная форма платежа."""

    ENTITY_KEY = "nav.payments"

    def __init__(
        self, service, instance=None, *, appointment_service, executor=None, parent=None
    ):
        self.appointment_service = appointment_service
        super().__init__(service, instance, executor=executor, parent=parent)

    def build_form(self):
        self.appointment_combo = self.add_field("appointment", QComboBox())
        self.add_field("value", QLineEdit())
        self.add_field("method", QLineEdit())
        self.add_field("status", create_enum_combo(PAYMENT_STATUSES))
        self.add_field("pix_txid", QLineEdit())
        self.add_field("receipt_url", QLineEdit())
        self._selected_appointment = None
        self._load_appointments()

    def _load_appointments(self):
        self.executor.submit(
            lambda: self.appointment_service.get_page(1, APPOINTMENT_OPTIONS_LIMIT),
            self._on_appointments_loaded,
            self._on_appointments_failed,
        )

    def _on_appointments_loaded(self, result):
        populate_combo(
            self.appointment_combo,
            result.items,
            label_func=appointment_label,
            placeholder="-",
        )
        if self._selected_appointment:
            set_selected_by_id(self.appointment_combo, self._selected_appointment)

    def _on_appointments_failed(self, exc: BaseException):
        logger.error("Ошибка при загрузке консультаций", exc_info=exc)

    def fill_from_obj(self, obj):
        super().fill_from_obj(obj)
        self._selected_appointment = obj.appointment_id
        if self.appointment_combo.findData(obj.appointment_id) < 0:
            self.appointment_combo.addItem(obj.procedure or obj.appointment_id, obj.appointment_id)
        set_selected_by_id(self.appointment_combo, obj.appointment_id)

    def build_payload(self, data: dict) -> dict:
        if not data["appointment"]:
            raise ValidationError("required", "appointment")
        value = parse_decimal(data["value"], "value")
        return compact_payload(
            {
                "appointmentId": data["appointment"],
                "value": float(value),
                "method": require(data["method"], "method"),
                "status": data["status"],
                "pixTxid": optional_text(data["pix_txid"]),
                "comprovanteUrl": optional_text(data["receipt_url"]),
            }
        )
