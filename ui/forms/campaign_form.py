from PySide6.QtWidgets import QLineEdit, QPlainTextEdit

from services.campaign_service import CAMPAIGN_STATUSES
from services.validators import local_to_iso_utc, optional_text, require
from ui.base.base_edit_form import BaseEditForm, compact_payload
from ui.common.combo_helpers import create_enum_combo
from ui.common.date_utils import make_optional_datetime_edit


class CampaignForm(BaseEditForm):
    """Кампания рассылки; дата отправки необязательна."""

    ENTITY_KEY = "nav.campaigns"

    def build_form(self):
        self.add_field("name", QLineEdit())
        self.add_field("channel", QLineEdit())
        self.add_field("status", create_enum_combo(CAMPAIGN_STATUSES))
        self.add_field("scheduled_at", make_optional_datetime_edit())
        self.add_field("message", QPlainTextEdit())

    def build_payload(self, data: dict) -> dict:
        payload = compact_payload(
            {
                "name": require(data["name"], "name"),
                "channel": require(data["channel"], "channel"),
                "message": require(data["message"], "message"),
                "status": data["status"],
            }
        )
        # пустая дата снимает планирование
        payload["scheduledAt"] = local_to_iso_utc(data["scheduled_at"])
        return payload
